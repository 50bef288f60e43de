"""网关协议服务模块"""

from .protocol_service import (
    apply_config_updates,
    build_request_params,
    build_signed_params,
    extract_response_node,
    resolve_cert_sns,
    resolve_verify_public_key,
    sign_v3_headers,
    to_caller_shape,
    verify_callback,
    verify_callback_v3,
)

__all__ = [
    "apply_config_updates",
    "build_request_params",
    "build_signed_params",
    "extract_response_node",
    "resolve_cert_sns",
    "resolve_verify_public_key",
    "sign_v3_headers",
    "to_caller_shape",
    "verify_callback",
    "verify_callback_v3",
]
