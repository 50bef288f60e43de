"""支付宝客户端模块"""

from .base_http_client import AlipayHTTPClient
from .alipay_client import AlipaySdk
from .apis import AlipayApis

__all__ = [
    "AlipayHTTPClient",
    "AlipaySdk",
    "AlipayApis",
]
