"""数据模型模块"""

from .config import AlipayConfig, SignType, KeyType
from .certificate import CertificateInfo
from .payload import JsonValue, JsonObject, CanonicalParams
from .response import AlipayCommonResult, V3SignedHeaders, TradeStatus
from .errors import (
    ErrorCode,
    ErrorMessage,
    AlipayError,
    ConfigurationError,
    KeyFormatError,
    CanonicalizationError,
    CertificateError,
    AesCipherError,
    EncryptionError,
    DecryptionError,
    AlipayRequestError,
    AlipayResponseError,
)

__all__ = [
    "AlipayConfig",
    "SignType",
    "KeyType",
    "CertificateInfo",
    "JsonValue",
    "JsonObject",
    "CanonicalParams",
    "AlipayCommonResult",
    "V3SignedHeaders",
    "TradeStatus",
    "ErrorCode",
    "ErrorMessage",
    "AlipayError",
    "ConfigurationError",
    "KeyFormatError",
    "CanonicalizationError",
    "CertificateError",
    "AesCipherError",
    "EncryptionError",
    "DecryptionError",
    "AlipayRequestError",
    "AlipayResponseError",
]
