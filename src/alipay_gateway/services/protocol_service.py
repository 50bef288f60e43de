"""
网关协议核心

编排器（AlipaySdk）与签名/加解密核心之间的窄接口：

- build_request_params: 业务载荷 -> 完整的已签名网关参数
- build_signed_params: 网关参数 -> 追加公共参数并计算 sign
- sign_v3_headers: V3 请求签名头
- verify_callback / verify_callback_v3: 异步通知验签
- to_caller_shape: 网关响应 -> 调用方结果（解密 + 驼峰转换）
- resolve_cert_sns: 根据证书内容推导证书序列号

这里的函数都不持有状态，凭证通过 AlipayConfig 显式传入。
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic.alias_generators import to_snake

from ..constants import (
    AlipayResponse,
    ENCRYPT_TYPE_AES,
    SIGN_FIELD,
    SIGN_TYPE_FIELD,
)
from ..models.config import AlipayConfig
from ..models.errors import (
    AlipayResponseError,
    CertificateError,
    ConfigurationError,
    DecryptionError,
    ErrorCode,
    ErrorMessage,
)
from ..models.payload import CanonicalParams
from ..models.response import V3SignedHeaders
from ..utils.aes_cipher import aes_decrypt, aes_encrypt, aes_encrypt_text
from ..utils.case_utils import camel_case_keys, decamelize, remove_empty_values, snake_case_keys
from ..utils.cert_utils import CertUtils
from ..utils.helpers import create_request_id, current_millis, format_timestamp
from ..utils.rsa_signer import build_sign_content, sign, stringify_value, verify
from ..utils.signature_v3 import QueryParams, signature_v3, verify_signature_v3

logger = logging.getLogger(__name__)

# 调用方可用于传入业务参数的键
_BIZ_CONTENT_KEYS = ("bizContent", "biz_content")
_NEED_ENCRYPT_KEYS = ("needEncrypt", "need_encrypt")

# 证书内容字段 -> 证书SN字段
_CERT_SN_FIELDS = (
    ("app_cert_content", "app_cert_sn"),
    ("alipay_public_cert_content", "alipay_cert_sn"),
    ("alipay_root_cert_content", "alipay_root_cert_sn"),
)


def resolve_cert_sns(config: AlipayConfig) -> AlipayConfig:
    """补齐证书序列号

    配置了证书内容但未给出 SN 时，从证书推导 SN 并返回新的配置对象。
    推导失败时：strict_cert=True 抛出 ConfigurationError，否则记录告警并保持 SN 为空。

    Raises:
        ConfigurationError: strict_cert 模式下证书SN推导失败
    """
    updates = {}
    for content_field, sn_field in _CERT_SN_FIELDS:
        content = getattr(config, content_field)
        if not content or getattr(config, sn_field):
            continue
        sn = CertUtils.try_get_cert_serial_number(content)
        if sn is None:
            if config.strict_cert:
                raise ConfigurationError(ErrorMessage.cert_error(f"推导 {sn_field}"))
            logger.warning(f"证书序列号初始化失败: {sn_field} 保持为空")
            continue
        updates[sn_field] = sn

    if not updates:
        return config
    return config.model_copy(update=updates)


def apply_config_updates(config: AlipayConfig, **changes) -> AlipayConfig:
    """整体替换配置

    更换了证书内容但没有同时给出 SN 时，丢弃旧 SN 并重新推导。
    """
    changes = {to_snake(key): value for key, value in changes.items()}
    for content_field, sn_field in _CERT_SN_FIELDS:
        if content_field in changes and sn_field not in changes:
            changes[sn_field] = None
    return resolve_cert_sns(config.with_updates(**changes))


def resolve_verify_public_key(config: AlipayConfig) -> str:
    """选择验签公钥

    优先使用支付宝公钥证书中的公钥，其次是支付宝公钥字符串。

    Raises:
        ConfigurationError: 两者均未配置，或公钥证书无法解析
    """
    if config.alipay_public_cert_content:
        try:
            return CertUtils.extract_public_key_from_cert(config.alipay_public_cert_content)
        except CertificateError as e:
            raise ConfigurationError(f"支付宝公钥证书无效: {e}") from e
    if config.alipay_public_key:
        return config.alipay_public_key
    raise ConfigurationError(
        ErrorMessage.missing_public_key(), code=ErrorCode.MISSING_PUBLIC_KEY
    )


def build_signed_params(
    method: str,
    params: Mapping[str, Any],
    config: AlipayConfig,
    timestamp: Optional[str] = None,
) -> CanonicalParams:
    """构建带签名的网关参数

    Args:
        method: 接口方法名，如 "alipay.trade.pay"
        params: 额外的网关参数（下划线键，已包含序列化后的 biz_content）
        config: 凭证配置
        timestamp: 网关时间戳（默认当前时间）

    Returns:
        包含 sign 的完整参数字典，可直接用于URL编码与发送
    """
    request_params: dict[str, Any] = {
        "app_id": config.app_id,
        "method": method,
        "charset": config.charset,
        "sign_type": config.sign_type,
        "timestamp": timestamp or format_timestamp(),
        "version": config.version,
        **params,
    }

    if config.app_cert_sn:
        request_params["app_cert_sn"] = config.app_cert_sn
    if config.alipay_cert_sn:
        request_params["alipay_cert_sn"] = config.alipay_cert_sn
    if config.alipay_root_cert_sn:
        request_params["alipay_root_cert_sn"] = config.alipay_root_cert_sn

    clean_params = {
        key: stringify_value(value)
        for key, value in remove_empty_values(request_params).items()
    }
    clean_params.pop(SIGN_FIELD, None)

    sign_content = build_sign_content(clean_params)
    clean_params[SIGN_FIELD] = sign(
        sign_content, config.private_key, config.sign_type, config.key_type
    )
    return clean_params


def build_request_params(
    method: str,
    params: Optional[Mapping[str, Any]],
    config: AlipayConfig,
    bizcontent_auto_snakecase: bool = True,
) -> CanonicalParams:
    """将调用方参数转换为已签名的网关参数

    - bizContent / biz_content: 业务参数，默认驼峰转下划线后序列化为JSON
    - needEncrypt: 为真时使用 AES 加密业务参数（encrypt_type=AES）
    - 其余参数键名转为下划线后作为公共参数上送（如 notifyUrl -> notify_url）

    Raises:
        ConfigurationError: 要求加密但未配置 encrypt_key
    """
    other_params = dict(params or {})
    biz_content = None
    for key in _BIZ_CONTENT_KEYS:
        value = other_params.pop(key, None)
        if value is not None:
            biz_content = value
    need_encrypt = False
    for key in _NEED_ENCRYPT_KEYS:
        need_encrypt = bool(other_params.pop(key, False)) or need_encrypt

    gateway_params: dict[str, Any] = {decamelize(k): v for k, v in other_params.items()}

    if biz_content is not None:
        content = biz_content
        if bizcontent_auto_snakecase and not isinstance(content, str):
            content = snake_case_keys(content)

        if need_encrypt:
            if not config.encrypt_key:
                raise ConfigurationError("要求加密业务参数，但未配置 encrypt_key")
            gateway_params["encrypt_type"] = ENCRYPT_TYPE_AES
            if isinstance(content, str):
                gateway_params["biz_content"] = aes_encrypt_text(content, config.encrypt_key)
            else:
                gateway_params["biz_content"] = aes_encrypt(content, config.encrypt_key)
        else:
            gateway_params["biz_content"] = stringify_value(content)

    return build_signed_params(method, gateway_params, config)


def sign_v3_headers(
    method: str,
    pathname: str,
    params: QueryParams,
    request_body: Optional[str],
    app_auth_token: Optional[str],
    config: AlipayConfig,
    timestamp: Optional[int] = None,
) -> V3SignedHeaders:
    """V3 请求签名

    Returns:
        timestamp / nonce / signature 三个请求头取值
    """
    ts = timestamp if timestamp is not None else current_millis()
    signature = signature_v3(
        method,
        pathname,
        params,
        request_body,
        app_auth_token,
        ts,
        config.private_key,
        config.sign_type,
        config.key_type,
    )
    return V3SignedHeaders(timestamp=str(ts), nonce=create_request_id(), signature=signature)


def verify_callback(raw_params: Mapping[str, str], config: AlipayConfig) -> bool:
    """验证异步通知签名

    去掉 sign / sign_type 后重建待签名字符串再验签。
    sign_type 优先取通知中的值，其次取配置。

    Raises:
        ConfigurationError: 未配置支付宝公钥或公钥证书
    """
    public_key = resolve_verify_public_key(config)

    signature = raw_params.get(SIGN_FIELD)
    if not signature:
        return False

    sign_type = raw_params.get(SIGN_TYPE_FIELD) or config.sign_type
    sign_params = {
        key: value
        for key, value in raw_params.items()
        if key not in (SIGN_FIELD, SIGN_TYPE_FIELD)
    }
    return verify(build_sign_content(sign_params), signature, public_key, sign_type)


def verify_callback_v3(
    timestamp: str,
    nonce: str,
    request_body: str,
    signature: str,
    config: AlipayConfig,
) -> bool:
    """验证 V3 回调签名

    Raises:
        ConfigurationError: 未配置支付宝公钥或公钥证书
    """
    public_key = resolve_verify_public_key(config)
    return verify_signature_v3(
        timestamp, nonce, request_body, signature, public_key, config.sign_type
    )


def extract_response_node(response_data: Mapping[str, Any], method: str) -> Any:
    """取出响应节点：{method}_response，否则 error_response

    Raises:
        AlipayResponseError: 两者都不存在
    """
    response_key = AlipayResponse.response_key(method)
    if response_data.get(response_key) is not None:
        return response_data[response_key]
    if response_data.get(AlipayResponse.ERROR_RESPONSE_KEY) is not None:
        return response_data[AlipayResponse.ERROR_RESPONSE_KEY]
    raise AlipayResponseError(ErrorMessage.invalid_response())


def to_caller_shape(
    response_data: Mapping[str, Any],
    method: str,
    config: AlipayConfig,
) -> dict[str, Any]:
    """将网关响应转换为调用方结果

    1. 取出响应节点
    2. 加密响应（encrypt_type=AES）且成功时先解密；
       解密失败只记录告警，返回信封中已有的明文字段
    3. camelcase 配置开启时转为驼峰键

    业务失败（code != "10000"）不是异常，原样返回供调用方判断。

    Raises:
        AlipayResponseError: 响应中没有可识别的节点
        DecryptionError: 整个响应节点是密文且无法解密
    """
    result = extract_response_node(response_data, method)
    encrypted = response_data.get("encrypt_type") == ENCRYPT_TYPE_AES

    if isinstance(result, str):
        # 整个响应节点为密文，没有可回退的明文字段
        if not (encrypted and config.encrypt_key):
            raise AlipayResponseError(ErrorMessage.invalid_response())
        result = aes_decrypt(result, config.encrypt_key)
    elif (
        isinstance(result, Mapping)
        and encrypted
        and config.encrypt_key
        and result.get("code") == AlipayResponse.SUCCESS_CODE
    ):
        try:
            decrypted = aes_decrypt(result.get("biz_content"), config.encrypt_key)
            if isinstance(decrypted, Mapping):
                result = {**result, **decrypted}
        except DecryptionError as e:
            logger.warning(f"AES 解密失败: {e}")

    if not isinstance(result, Mapping):
        raise AlipayResponseError(ErrorMessage.invalid_response())

    if config.camelcase:
        return camel_case_keys(result)
    return dict(result)
