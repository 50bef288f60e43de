"""
支付宝开放平台 Python SDK

经典网关（RSA/RSA2 签名）与 V3 接口签名、AES 业务参数加密、
公钥证书模式，以及常用业务接口封装。
"""

from .clients import AlipaySdk, AlipayApis
from .config import configure_logging, load_config_from_env
from .models import (
    AlipayConfig,
    AlipayCommonResult,
    CertificateInfo,
    TradeStatus,
    AlipayError,
    ConfigurationError,
    KeyFormatError,
    CanonicalizationError,
    CertificateError,
    EncryptionError,
    DecryptionError,
    AlipayRequestError,
    AlipayResponseError,
)
from .utils import CertUtils, CertificateManager

__version__ = "0.1.0"

__all__ = [
    "AlipaySdk",
    "AlipayApis",
    "configure_logging",
    "load_config_from_env",
    "AlipayConfig",
    "AlipayCommonResult",
    "CertificateInfo",
    "TradeStatus",
    "AlipayError",
    "ConfigurationError",
    "KeyFormatError",
    "CanonicalizationError",
    "CertificateError",
    "EncryptionError",
    "DecryptionError",
    "AlipayRequestError",
    "AlipayResponseError",
    "CertUtils",
    "CertificateManager",
]
