"""工具模块"""

from .case_utils import (
    decamelize,
    camelize,
    snake_case_keys,
    camel_case_keys,
    remove_empty_values,
    to_caller_case,
    to_gateway_case,
)
from .rsa_signer import RSASigner, RSAVerifier, build_sign_content, sign, verify
from .signature_v3 import signature_v3, verify_signature_v3
from .aes_cipher import aes_encrypt, aes_decrypt, aes_encrypt_text, aes_decrypt_text
from .cert_utils import CertUtils, CertificateManager
from .helpers import (
    create_request_id,
    format_timestamp,
    format_amount,
    generate_out_trade_no,
    validate_required_params,
    safe_json_parse,
    build_gateway_url,
)

__all__ = [
    "decamelize",
    "camelize",
    "snake_case_keys",
    "camel_case_keys",
    "remove_empty_values",
    "to_gateway_case",
    "to_caller_case",
    "RSASigner",
    "RSAVerifier",
    "build_sign_content",
    "sign",
    "verify",
    "signature_v3",
    "verify_signature_v3",
    "aes_encrypt",
    "aes_decrypt",
    "aes_encrypt_text",
    "aes_decrypt_text",
    "CertUtils",
    "CertificateManager",
    "create_request_id",
    "format_timestamp",
    "format_amount",
    "generate_out_trade_no",
    "validate_required_params",
    "safe_json_parse",
    "build_gateway_url",
]
