r"""
V3 接口签名

请求签名串（固定六个字段，以换行拼接，缺省字段用空串占位）：

    {HTTP方法大写}\n{path}\n{query}\n{body}\n{app_auth_token}\n{毫秒时间戳}

回调验签串（支付宝只对三个字段签名）：

    {timestamp}\n{nonce}\n{body}

出站与入站签名串不对称是协议本身的要求。
"""

from collections.abc import Mapping, Sequence
from typing import Optional, Union
from urllib.parse import urlencode

from .rsa_signer import sign, verify

QueryParams = Union[str, Mapping[str, str], Sequence[tuple[str, str]], None]


def encode_query(params: QueryParams) -> str:
    """将查询参数编码为实际发送的查询串

    与 URLSearchParams 一致：空格编码为 "+"。
    已编码的字符串原样返回。
    """
    if not params:
        return ""
    if isinstance(params, str):
        return params.lstrip("?")
    return urlencode(params)


def build_v3_sign_content(
    method: str,
    pathname: str,
    params: QueryParams = None,
    request_body: Optional[str] = None,
    app_auth_token: Optional[str] = None,
    timestamp: int | str = 0,
) -> str:
    """构建 V3 请求待签名字符串

    Examples:
        >>> build_v3_sign_content("post", "/v3/pay", None, '{"a":1}', None, 1700000000000)
        'POST\\n/v3/pay\\n\\n{"a":1}\\n\\n1700000000000'
    """
    return "\n".join(
        [
            method.upper(),
            pathname,
            encode_query(params),
            request_body or "",
            app_auth_token or "",
            str(timestamp),
        ]
    )


def build_v3_verify_content(timestamp: str, nonce: str, request_body: Optional[str]) -> str:
    """构建 V3 回调待验签字符串"""
    return "\n".join([str(timestamp), nonce, request_body or ""])


def signature_v3(
    method: str,
    pathname: str,
    params: QueryParams,
    request_body: Optional[str],
    app_auth_token: Optional[str],
    timestamp: int,
    private_key: str | bytes,
    sign_type: str = "RSA2",
    key_type: str = "PKCS8",
) -> str:
    """V3 接口签名

    Args:
        method: HTTP方法
        pathname: 请求路径（不含查询串）
        params: 查询参数
        request_body: 原始请求体
        app_auth_token: 应用授权令牌（可选）
        timestamp: 毫秒时间戳
        private_key: 应用私钥
        sign_type: 签名类型
        key_type: 私钥格式

    Returns:
        Base64编码的签名
    """
    content = build_v3_sign_content(
        method, pathname, params, request_body, app_auth_token, timestamp
    )
    return sign(content, private_key, sign_type, key_type)


def verify_signature_v3(
    timestamp: str,
    nonce: str,
    request_body: Optional[str],
    signature: str,
    public_key: str | bytes,
    sign_type: str = "RSA2",
) -> bool:
    """V3 回调验签，失败返回 False，不抛出异常"""
    try:
        content = build_v3_verify_content(timestamp, nonce, request_body)
    except TypeError:
        return False
    return verify(content, signature, public_key, sign_type)
