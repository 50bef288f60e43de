"""
AES 报文加解密

AES-CBC + PKCS#7 填充，IV 固定为16字节全零。
IV 由网关协议约定，不可配置。
"""

import base64
import binascii
import json
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..constants import AES_ZERO_IV
from ..models.errors import DecryptionError, EncryptionError, KeyFormatError
from .key_loader import decode_aes_key


def _cipher(aes_key: str) -> Cipher:
    return Cipher(algorithms.AES(decode_aes_key(aes_key)), modes.CBC(AES_ZERO_IV))


def aes_encrypt_text(plain_text: str, aes_key: str) -> str:
    """AES 加密文本

    Args:
        plain_text: 明文
        aes_key: base64 编码的 AES 密钥

    Returns:
        base64 密文

    Raises:
        EncryptionError: 如果密钥无效
    """
    try:
        cipher = _cipher(aes_key)
    except KeyFormatError as e:
        raise EncryptionError(f"AES 加密失败: {e}") from e

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    data = padder.update(plain_text.encode("utf-8")) + padder.finalize()

    encryptor = cipher.encryptor()
    encrypted = encryptor.update(data) + encryptor.finalize()
    return base64.b64encode(encrypted).decode("ascii")


def aes_decrypt_text(encrypted_text: str, aes_key: str) -> str:
    """AES 解密文本

    Raises:
        DecryptionError: 如果密钥错误、密文损坏或填充无效
    """
    try:
        cipher = _cipher(aes_key)
        encrypted = base64.b64decode(encrypted_text, validate=True)

        decryptor = cipher.decryptor()
        data = decryptor.update(encrypted) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plain = unpadder.update(data) + unpadder.finalize()
        return plain.decode("utf-8")
    except (KeyFormatError, binascii.Error, ValueError, TypeError) as e:
        raise DecryptionError(f"AES 解密失败: {e}") from e


def aes_encrypt(data: Any, aes_key: str) -> str:
    """AES 加密对象（先序列化为紧凑JSON）"""
    plain_text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return aes_encrypt_text(plain_text, aes_key)


def aes_decrypt(encrypted_text: str, aes_key: str) -> Any:
    """AES 解密对象

    Raises:
        DecryptionError: 如果解密失败或明文不是合法JSON
    """
    plain_text = aes_decrypt_text(encrypted_text, aes_key)
    try:
        return json.loads(plain_text)
    except json.JSONDecodeError as e:
        raise DecryptionError(f"AES 解密结果不是合法JSON: {e}") from e
