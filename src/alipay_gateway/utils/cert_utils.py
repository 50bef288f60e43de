"""
证书工具

处理支付宝公钥证书模式相关功能：
- 证书序列号推导（用于 app_cert_sn / alipay_cert_sn / alipay_root_cert_sn）
- 从证书中提取公钥（SPKI）
- 有效期检查与 SHA-256 指纹
- CertificateManager: 按序列号管理多张证书（证书轮换）

序列号说明：
get_cert_serial_number 使用简化算法：对证书 DER 前100字节做
32位滚动哈希（h = h * 31 + b），以大写十六进制表示。它只保证
"相同证书得到相同序列号"，不是 X.509 中的序列号字段。
证书中真实的序列号见 get_x509_serial_number。

本模块不做证书链信任校验，verify_cert_chain 只检查有效期。
"""

import base64
import binascii
import hashlib
import logging
import re
import threading
from datetime import datetime, timezone
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from ..models.certificate import CertificateInfo
from ..models.errors import CertificateError, ErrorMessage
from .key_loader import strip_pem, to_pem

logger = logging.getLogger(__name__)

_CERT_BLOCK = re.compile(
    r"-----BEGIN CERTIFICATE-----(.*?)-----END CERTIFICATE-----", re.DOTALL
)

# 参与滚动哈希的字节数
_SERIAL_HASH_BYTES = 100


def _rolling_hash_hex(data: bytes) -> str:
    value = 0
    for byte in data[:_SERIAL_HASH_BYTES]:
        value = ((value << 5) - value + byte) & 0xFFFFFFFF
    # 按有符号32位整数取绝对值
    if value & 0x80000000:
        value -= 0x100000000
    return format(abs(value), "X")


class CertUtils:
    """证书工具类"""

    @staticmethod
    def split_certificates(cert_content: str) -> list[str]:
        """拆分证书文件中的多张证书，返回各自的 base64 主体

        根证书文件通常包含多张证书；不含 PEM 头尾时整体视为一张证书。
        """
        if not cert_content or not cert_content.strip():
            raise CertificateError(ErrorMessage.cert_error("解析证书", "证书内容为空"))
        blocks = [strip_pem(b) for b in _CERT_BLOCK.findall(cert_content)]
        if blocks:
            return blocks
        return [strip_pem(cert_content)]

    @staticmethod
    def decode_certificate(body: str) -> bytes:
        """base64 解码单张证书主体为 DER 字节"""
        try:
            der = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise CertificateError(ErrorMessage.cert_error("解码证书", str(e))) from e
        if not der:
            raise CertificateError(ErrorMessage.cert_error("解码证书", "证书内容为空"))
        return der

    @classmethod
    def load_certificate(cls, cert_content: str) -> x509.Certificate:
        """加载证书文件中的第一张证书"""
        der = cls.decode_certificate(cls.split_certificates(cert_content)[0])
        try:
            return x509.load_der_x509_certificate(der)
        except ValueError as e:
            raise CertificateError(ErrorMessage.cert_error("解析证书", str(e))) from e

    @classmethod
    def get_cert_serial_number(cls, cert_content: str) -> str:
        """从证书内容推导序列号（简化算法，见模块说明）

        多张证书时，各证书序列号以 "_" 连接。

        Args:
            cert_content: PEM 证书内容

        Returns:
            大写十六进制序列号

        Raises:
            CertificateError: 如果证书内容无法解码
        """
        serials = [
            _rolling_hash_hex(cls.decode_certificate(body))
            for body in cls.split_certificates(cert_content)
        ]
        return "_".join(serials)

    @classmethod
    def try_get_cert_serial_number(cls, cert_content: str) -> Optional[str]:
        """推导序列号，失败时返回 None 而不是抛出异常

        由调用方决定失败时是否中止（fail closed）。
        """
        try:
            return cls.get_cert_serial_number(cert_content)
        except CertificateError as e:
            logger.warning(f"证书序列号推导失败: {e}")
            return None

    @classmethod
    def get_x509_serial_number(cls, cert_content: str) -> str:
        """读取证书 DER 中真实的序列号字段（大写十六进制）"""
        return format(cls.load_certificate(cert_content).serial_number, "X")

    @classmethod
    def parse_certificate(cls, cert_content: str) -> CertificateInfo:
        """解析证书信息

        Raises:
            CertificateError: 如果内容不是合法的 X.509 证书
        """
        cert = cls.load_certificate(cert_content)
        return CertificateInfo(
            serial_number=cls.get_cert_serial_number(cert_content),
            content=cert_content,
            not_before=cert.not_valid_before_utc,
            not_after=cert.not_valid_after_utc,
            issuer=cert.issuer.rfc4514_string(),
            subject=cert.subject.rfc4514_string(),
        )

    @classmethod
    def verify_certificate(cls, cert_content: str) -> bool:
        """当前时间是否处于证书有效期内，无法解析时返回 False"""
        try:
            return cls.parse_certificate(cert_content).is_valid()
        except CertificateError:
            return False

    @classmethod
    def extract_public_key_from_cert(cls, cert_content: str) -> str:
        """从证书中提取公钥

        Returns:
            SPKI DER 的 base64 字符串，可直接作为支付宝公钥使用

        Raises:
            CertificateError: 如果证书无法解析
        """
        public_key = cls.load_certificate(cert_content).public_key()
        der = public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return base64.b64encode(der).decode("ascii")

    @classmethod
    def get_cert_fingerprint(cls, cert_content: str) -> str:
        """证书 SHA-256 指纹（大写十六进制，无分隔符）"""
        der = cls.decode_certificate(cls.split_certificates(cert_content)[0])
        return hashlib.sha256(der).hexdigest().upper()

    @staticmethod
    def normalize_certificate(cert_content: str) -> str:
        """标准化证书格式（重新生成 PEM 头尾与换行）"""
        return to_pem(strip_pem(cert_content), "CERTIFICATE").decode("ascii")

    @classmethod
    def build_cert_chain(cls, certs: list[str]) -> list[str]:
        """构建证书链"""
        return [cls.normalize_certificate(cert) for cert in certs]

    @classmethod
    def verify_cert_chain(cls, cert_chain: list[str], root_cert: str) -> bool:
        """验证证书链

        只检查链上每张证书及根证书是否在有效期内，不做签名信任校验。
        """
        if not cert_chain:
            return False
        return all(cls.verify_certificate(cert) for cert in cert_chain) and cls.verify_certificate(
            root_cert
        )


class CertificateManager:
    """证书管理器

    按序列号保存证书描述信息。写操作（添加/移除/清理）在实例内串行化；
    描述信息本身不可变，读取方拿到的是快照。
    """

    def __init__(self) -> None:
        self._certificates: dict[str, CertificateInfo] = {}
        self._lock = threading.RLock()

    def add_certificate(self, sn: str, cert_content: str) -> CertificateInfo:
        """添加证书

        Args:
            sn: 证书序列号
            cert_content: PEM 证书内容

        Returns:
            解析后的证书信息

        Raises:
            CertificateError: 如果证书无法解析
        """
        cert_info = CertUtils.parse_certificate(cert_content)
        with self._lock:
            self._certificates[sn] = cert_info
        logger.debug(f"已添加证书: sn={sn}, not_after={cert_info.not_after.isoformat()}")
        return cert_info

    def get_certificate(self, sn: str) -> Optional[CertificateInfo]:
        return self._certificates.get(sn)

    def remove_certificate(self, sn: str) -> bool:
        """移除证书，返回是否存在"""
        with self._lock:
            return self._certificates.pop(sn, None) is not None

    def get_valid_certificates(self, at: Optional[datetime] = None) -> list[CertificateInfo]:
        """获取调用时刻处于有效期内的所有证书"""
        now = at or datetime.now(timezone.utc)
        return [cert for cert in list(self._certificates.values()) if cert.is_valid(now)]

    def clean_expired_certificates(self, at: Optional[datetime] = None) -> list[str]:
        """清理过期证书

        Returns:
            被移除的证书序列号列表
        """
        now = at or datetime.now(timezone.utc)
        with self._lock:
            expired = [sn for sn, cert in self._certificates.items() if cert.is_expired(now)]
            for sn in expired:
                del self._certificates[sn]
        if expired:
            logger.info(f"已清理过期证书: {expired}")
        return expired

    def size(self) -> int:
        return len(self._certificates)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, sn: str) -> bool:
        return sn in self._certificates

    def clear(self) -> None:
        with self._lock:
            self._certificates.clear()
