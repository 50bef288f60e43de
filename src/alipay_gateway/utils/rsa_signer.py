"""
RSA签名器（经典网关 V2）

签名流程：
1. 去掉 sign 字段与空值
2. 按 key 字节序升序排序
3. 拼接为 key=value&key=value（不做URL编码）
4. 私钥签名 -> Base64编码

签名算法：RSASSA-PKCS1-v1_5
- RSA: SHA-1
- RSA2: SHA-256
"""

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from typing import Any

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..constants import HASH_ALGORITHM_MAPPING, SIGN_FIELD
from ..models.errors import AlipayError, ErrorMessage
from .key_loader import load_private_key, load_public_key

logger = logging.getLogger(__name__)


def get_hash_algorithm(sign_type: str) -> hashes.HashAlgorithm:
    """根据签名类型获取摘要算法

    Raises:
        ValueError: 如果签名类型不是 RSA / RSA2
    """
    try:
        return HASH_ALGORITHM_MAPPING[sign_type]()
    except KeyError:
        raise ValueError(ErrorMessage.unsupported_sign_type(sign_type)) from None


def stringify_value(value: Any) -> str:
    """将参数值渲染为上送字符串

    布尔值与JSON保持一致（true/false），容器类型序列化为紧凑JSON。
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def build_sign_content(params: Mapping[str, Any]) -> str:
    """构建待签名字符串

    Args:
        params: 网关参数（下划线键）

    Returns:
        形如 "a=1&b=2" 的待签名字符串

    Examples:
        >>> build_sign_content({"b": "2", "a": "1", "sign": "x", "c": ""})
        'a=1&b=2'
    """
    items = []
    for key in sorted(params, key=lambda k: k.encode("utf-8")):
        if key == SIGN_FIELD:
            continue
        value = params[key]
        if value is None:
            continue
        text = stringify_value(value)
        if text == "":
            continue
        items.append(f"{key}={text}")
    return "&".join(items)


class RSASigner:
    """RSA签名器

    使用应用私钥对待签名字符串进行签名。

    Args:
        private_key: 应用私钥（PEM 或去头尾的 base64）
        sign_type: 签名类型，"RSA" 或 "RSA2"
        key_type: 私钥格式，"PKCS8" 或 "PKCS1"
    """

    def __init__(
        self,
        private_key: str | bytes,
        sign_type: str = "RSA2",
        key_type: str = "PKCS8",
    ) -> None:
        """初始化RSA签名器

        Raises:
            KeyFormatError: 如果私钥格式无效
            ValueError: 如果签名类型无效
        """
        self._hash = get_hash_algorithm(sign_type)
        self._private_key = load_private_key(private_key, key_type)
        self.sign_type = sign_type

    def sign(self, content: str) -> str:
        """对待签名字符串进行签名

        Args:
            content: 待签名字符串

        Returns:
            Base64编码的签名
        """
        signature = self._private_key.sign(
            content.encode("utf-8"),
            padding.PKCS1v15(),
            self._hash,
        )
        return base64.b64encode(signature).decode("ascii")

    def public_key(self) -> rsa.RSAPublicKey:
        return self._private_key.public_key()


class RSAVerifier:
    """RSA验签器

    验签失败（包括签名或公钥格式错误）一律返回 False，不抛出异常。

    Args:
        public_key: 支付宝公钥（PEM 或 SPKI base64）
        sign_type: 签名类型，"RSA" 或 "RSA2"
    """

    def __init__(self, public_key: str | bytes, sign_type: str = "RSA2") -> None:
        self._hash = get_hash_algorithm(sign_type)
        self._public_key = load_public_key(public_key)
        self.sign_type = sign_type

    def verify(self, content: str, signature: str) -> bool:
        """验证签名

        Args:
            content: 待验签字符串
            signature: Base64编码的签名

        Returns:
            签名是否有效
        """
        try:
            signature_bytes = base64.b64decode(signature, validate=True)
            self._public_key.verify(
                signature_bytes,
                content.encode("utf-8"),
                padding.PKCS1v15(),
                self._hash,
            )
            return True
        except InvalidSignature:
            return False
        except (binascii.Error, ValueError, TypeError, AttributeError):
            return False


def sign(
    content: str,
    private_key: str | bytes,
    sign_type: str = "RSA2",
    key_type: str = "PKCS8",
) -> str:
    """RSA 签名

    Args:
        content: 待签名字符串
        private_key: 应用私钥
        sign_type: 签名类型
        key_type: 私钥格式

    Returns:
        Base64编码的签名

    Raises:
        KeyFormatError: 如果私钥格式无效
        ValueError: 如果签名类型无效
    """
    return RSASigner(private_key, sign_type, key_type).sign(content)


def verify(
    content: str,
    signature: str,
    public_key: str | bytes,
    sign_type: str = "RSA2",
) -> bool:
    """RSA 验签

    任何异常（签名被篡改、公钥无效、签名类型未知）都视为验签失败。
    """
    try:
        verifier = RSAVerifier(public_key, sign_type)
    except (AlipayError, ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.warning(f"验签失败: {e}")
        return False
    return verifier.verify(content, signature)
