"""
支付宝HTTP客户端基类

管理 httpx 连接池与代理，提供通用的请求方法。
签名与响应解析由子类负责。
"""

from typing import Optional

import httpx

from ..constants import USER_AGENT
from ..models.errors import AlipayRequestError, ErrorMessage


class AlipayHTTPClient:
    """支付宝HTTP客户端基类

    职责：
    - 管理HTTP连接
    - 发送请求并检查HTTP状态
    - 返回原始响应文本，由调用方负责解析
    """

    def __init__(
        self,
        timeout: float = 5.0,
        proxy_url: Optional[str] = None,
    ) -> None:
        limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)

        if proxy_url:
            transport = httpx.AsyncHTTPTransport(proxy=proxy_url)
        else:
            transport = None

        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            limits=limits,
            headers={"User-Agent": USER_AGENT},
        )

    async def __aenter__(self) -> "AlipayHTTPClient":
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """异步上下文管理器退出"""
        await self.close()

    async def close(self) -> None:
        """关闭HTTP客户端"""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        data: Optional[dict] = None,
        content: Optional[str] = None,
    ) -> str:
        """通用请求方法

        Args:
            method: HTTP方法
            url: 完整URL（查询串已编码）
            headers: 额外请求头
            data: 表单数据
            content: 原始请求体

        Returns:
            响应文本

        Raises:
            AlipayRequestError: 网络错误或HTTP状态码非2xx
        """
        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=headers,
                data=data,
                content=content.encode("utf-8") if content else None,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AlipayRequestError(
                ErrorMessage.request_error(
                    f"HTTP Error: {e.response.status_code} {e.response.reason_phrase}"
                ),
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise AlipayRequestError(ErrorMessage.request_error(str(e))) from e
        return response.text
