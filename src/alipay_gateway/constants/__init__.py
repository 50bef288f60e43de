"""支付宝协议常量定义"""

from .alipay import (
    AlipayGatewayURL,
    AlipayV3Header,
    AlipayResponse,
    HASH_ALGORITHM_MAPPING,
    SIGN_FIELD,
    SIGN_TYPE_FIELD,
    DEFAULT_SIGN_TYPE,
    DEFAULT_KEY_TYPE,
    DEFAULT_CHARSET,
    DEFAULT_VERSION,
    ENCRYPT_TYPE_AES,
    AES_ZERO_IV,
    USER_AGENT,
)

__all__ = [
    "AlipayGatewayURL",
    "AlipayV3Header",
    "AlipayResponse",
    "HASH_ALGORITHM_MAPPING",
    "SIGN_FIELD",
    "SIGN_TYPE_FIELD",
    "DEFAULT_SIGN_TYPE",
    "DEFAULT_KEY_TYPE",
    "DEFAULT_CHARSET",
    "DEFAULT_VERSION",
    "ENCRYPT_TYPE_AES",
    "AES_ZERO_IV",
    "USER_AGENT",
]
