"""
错误定义

集中管理SDK的错误码、错误消息模板与异常类型，避免硬编码。

错误分类：
- 配置错误：缺少密钥材料等，致命错误，不重试
- 验签失败：不是异常，以 False 返回，由调用方决定如何处理
- 加解密错误：可恢复，与伪造签名区分
- 输入格式错误：规范化/证书解析时的非法输入
- 请求/响应错误：HTTP传输失败或网关返回无法识别的结构
"""


class ErrorCode:
    """
    统一错误码定义

    遵循以下约定：
    - 使用大写字母和下划线
    - 命名格式：类别_具体错误
    """

    # ==================== 通用错误 ====================
    INTERNAL_ERROR = "INTERNAL_ERROR"  # 内部错误
    MISSING_PARAMETER = "MISSING_PARAMETER"  # 缺少参数

    # ==================== 配置错误 ====================
    CONFIG_ERROR = "CONFIG_ERROR"  # 配置错误
    INVALID_KEY = "INVALID_KEY"  # 密钥格式无效
    MISSING_PUBLIC_KEY = "MISSING_PUBLIC_KEY"  # 未配置支付宝公钥

    # ==================== 规范化与证书错误 ====================
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"  # 参数规范化失败
    CERTIFICATE_ERROR = "CERTIFICATE_ERROR"  # 证书解析失败

    # ==================== 加解密错误 ====================
    ENCRYPT_ERROR = "ENCRYPT_ERROR"  # AES加密失败
    DECRYPT_ERROR = "DECRYPT_ERROR"  # AES解密失败

    # ==================== 请求错误 ====================
    REQUEST_ERROR = "REQUEST_ERROR"  # HTTP请求失败
    INVALID_RESPONSE = "INVALID_RESPONSE"  # 无效的响应格式


class ErrorMessage:
    """
    错误消息模板
    """

    @staticmethod
    def missing_parameter(params: list[str]) -> str:
        """缺少必填参数"""
        return f"缺少必填参数: {', '.join(params)}"

    @staticmethod
    def missing_public_key() -> str:
        """未配置支付宝公钥"""
        return "支付宝公钥未配置"

    @staticmethod
    def invalid_key(kind: str, details: str = "") -> str:
        """密钥格式无效"""
        return f"无效的{kind}: {details}" if details else f"无效的{kind}"

    @staticmethod
    def unsupported_sign_type(sign_type: str) -> str:
        """不支持的签名类型"""
        return f"不支持的签名类型: {sign_type}，仅支持 RSA / RSA2"

    @staticmethod
    def cert_error(action: str, details: str = "") -> str:
        """证书处理失败"""
        return f"{action}失败: {details}" if details else f"{action}失败"

    @staticmethod
    def request_error(details: str) -> str:
        """请求失败"""
        return f"API 请求失败: {details}"

    @staticmethod
    def invalid_response() -> str:
        """无效的响应格式"""
        return "无效的响应格式"


class AlipayError(Exception):
    """SDK异常基类

    Attributes:
        code: 错误码（见 ErrorCode）
    """

    code: str = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class ConfigurationError(AlipayError):
    """配置错误（缺少或无效的密钥材料）"""

    code = ErrorCode.CONFIG_ERROR


class KeyFormatError(ConfigurationError):
    """密钥格式错误"""

    code = ErrorCode.INVALID_KEY


class CanonicalizationError(AlipayError):
    """参数规范化错误"""

    code = ErrorCode.CANONICALIZATION_ERROR


class CertificateError(AlipayError):
    """证书解析错误"""

    code = ErrorCode.CERTIFICATE_ERROR


class AesCipherError(AlipayError):
    """AES加解密错误基类"""


class EncryptionError(AesCipherError):
    """AES加密错误"""

    code = ErrorCode.ENCRYPT_ERROR


class DecryptionError(AesCipherError):
    """AES解密错误

    与验签失败区分：解密失败可能只是密钥配置错误，不一定意味着报文被伪造。
    """

    code = ErrorCode.DECRYPT_ERROR


class AlipayRequestError(AlipayError):
    """HTTP请求错误"""

    code = ErrorCode.REQUEST_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AlipayResponseError(AlipayError):
    """网关响应格式错误"""

    code = ErrorCode.INVALID_RESPONSE
