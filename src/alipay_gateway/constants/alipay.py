"""
支付宝开放平台常量定义

网关地址、V3请求头名称、签名算法映射等线上协议常量。
所有映射表均为只读，不允许在运行时修改。
"""

from types import MappingProxyType

from cryptography.hazmat.primitives import hashes


class AlipayGatewayURL:
    """支付宝网关地址"""

    # 经典网关（V2）
    GATEWAY = "https://openapi.alipay.com/gateway.do"

    # V3 endpoint
    ENDPOINT = "https://openapi.alipay.com"

    # 沙箱环境
    SANDBOX_GATEWAY = "https://openapi-sandbox.dl.alipaydev.com/gateway.do"
    SANDBOX_ENDPOINT = "https://openapi-sandbox.dl.alipaydev.com"


class AlipayV3Header:
    """V3 接口请求/回调头名称"""

    TIMESTAMP = "alipay-timestamp"
    NONCE = "alipay-nonce"
    SIGNATURE = "alipay-signature"
    APP_ID = "alipay-app-id"
    APP_AUTH_TOKEN = "alipay-app-auth-token"
    APP_CERT_SN = "alipay-app-cert-sn"


class AlipayResponse:
    """网关响应约定"""

    # 业务成功码（字符串字面量）
    SUCCESS_CODE = "10000"

    # 响应节点后缀，例如 alipay.trade.pay -> alipay_trade_pay_response
    RESPONSE_SUFFIX = "_response"

    # 网关级错误节点
    ERROR_RESPONSE_KEY = "error_response"

    # V3 响应无法解析时的兜底结果
    V3_PARSE_ERROR_CODE = "40004"

    @classmethod
    def response_key(cls, method: str) -> str:
        """根据接口方法名生成响应节点名"""
        return method.replace(".", "_") + cls.RESPONSE_SUFFIX


# 签名算法 -> 摘要算法，填充方式固定为 PKCS#1 v1.5
HASH_ALGORITHM_MAPPING = MappingProxyType(
    {
        "RSA": hashes.SHA1,
        "RSA2": hashes.SHA256,
    }
)

SIGN_FIELD = "sign"
SIGN_TYPE_FIELD = "sign_type"

DEFAULT_SIGN_TYPE = "RSA2"
DEFAULT_KEY_TYPE = "PKCS8"
DEFAULT_CHARSET = "utf-8"
DEFAULT_VERSION = "1.0"

ENCRYPT_TYPE_AES = "AES"

# AES-CBC 固定全零IV
AES_ZERO_IV = bytes(16)

USER_AGENT = "alipay-gateway-python/0.1.0"
