"""
支付宝SDK客户端

继承AlipayHTTPClient基类，在网关协议核心之上完成请求发送与结果转换：

- exec: 经典网关（form POST + RSA 签名）
- page_exec: 生成页面跳转用的表单或 URL（不发起请求）
- request_v3: V3 接口（JSON 请求体 + 签名请求头）
- check_notify_sign / check_notify_sign_v3: 异步通知验签

接口文档: https://opendocs.alipay.com/common/02kf5q
"""

import html
import logging
from collections.abc import Mapping
from typing import Any, Literal, Optional, Union

from ..constants import AlipayResponse
from ..models.config import AlipayConfig
from ..models.response import AlipayCommonResult
from ..services.protocol_service import (
    apply_config_updates,
    build_request_params,
    resolve_cert_sns,
    sign_v3_headers,
    to_caller_shape,
    verify_callback,
    verify_callback_v3,
)
from ..utils.helpers import build_gateway_url, safe_json_parse
from ..utils.signature_v3 import QueryParams, encode_query
from .apis import AlipayApis
from .base_http_client import AlipayHTTPClient

logger = logging.getLogger(__name__)


class AlipaySdk(AlipayHTTPClient):
    """支付宝SDK

    一个实例对应一个应用的凭证配置。配置不可变，update_config 整体替换，
    已经开始的请求继续使用发起时的配置。

    Args:
        config: AlipayConfig 或等价的字典（接受驼峰别名）

    Raises:
        pydantic.ValidationError: 配置字段不合法
        ConfigurationError: strict_cert 模式下证书SN推导失败

    Example:
        async with AlipaySdk({"appId": "2021...", "privateKey": "..."}) as sdk:
            result = await sdk.exec("alipay.trade.query", {"bizContent": {"outTradeNo": "123"}})
    """

    def __init__(self, config: Union[AlipayConfig, Mapping[str, Any]]) -> None:
        if not isinstance(config, AlipayConfig):
            config = AlipayConfig.model_validate(config)
        config = resolve_cert_sns(config)
        super().__init__(timeout=config.timeout, proxy_url=config.proxy_url)
        self._config = config
        self.apis = AlipayApis(self)

    @property
    def config(self) -> AlipayConfig:
        return self._config

    async def exec(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        bizcontent_auto_snakecase: bool = True,
    ) -> dict[str, Any]:
        """调用经典网关接口

        Args:
            method: 接口方法名，如 "alipay.trade.query"
            params: 调用方参数，bizContent 为业务参数，needEncrypt 控制是否加密
            bizcontent_auto_snakecase: 是否把 bizContent 的驼峰键转为下划线

        Returns:
            响应节点内容（camelcase 配置开启时为驼峰键）。
            业务失败（code != "10000"）同样正常返回。

        Raises:
            AlipayRequestError: 网络错误或HTTP状态码非2xx
            AlipayResponseError: 响应中没有可识别的节点
            ConfigurationError: 要求加密但未配置 encrypt_key
        """
        config = self._config
        request_params = build_request_params(method, params, config, bizcontent_auto_snakecase)

        logger.info(f"[Alipay] exec {method}")
        text = await self._request("POST", config.gateway, data=request_params)
        logger.debug(f"[Alipay] {method} 响应: {text}")

        response_data = safe_json_parse(text, {})
        if not isinstance(response_data, Mapping):
            response_data = {}
        result = to_caller_shape(response_data, method, config)

        if isinstance(result.get("code"), str):
            common = AlipayCommonResult.model_validate(result)
            if not common.is_success:
                logger.warning(
                    f"[Alipay] {method} 业务失败: code={common.code}, "
                    f"sub_code={common.sub_code}, sub_msg={common.sub_msg}"
                )
        return result

    def page_exec(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        http_method: Literal["GET", "POST"] = "POST",
        bizcontent_auto_snakecase: bool = True,
    ) -> str:
        """生成页面类接口的跳转内容（如 alipay.trade.page.pay）

        Returns:
            GET: 带签名参数的网关URL
            POST: 自动提交的 HTML 表单
        """
        request_params = build_request_params(
            method, params, self._config, bizcontent_auto_snakecase
        )
        if http_method.upper() == "GET":
            return build_gateway_url(self._config.gateway, request_params)

        inputs = "\n".join(
            f'  <input type="hidden" name="{html.escape(key)}" value="{html.escape(value)}">'
            for key, value in request_params.items()
        )
        return (
            f'<form action="{html.escape(self._config.gateway)}" method="post" '
            f'name="alipaySDKSubmit" id="alipaySDKSubmit">\n'
            f"{inputs}\n"
            f"</form>\n"
            f"<script>document.forms['alipaySDKSubmit'].submit();</script>"
        )

    def check_notify_sign(self, params: Mapping[str, str]) -> bool:
        """验证经典网关异步通知签名

        Raises:
            ConfigurationError: 未配置支付宝公钥或公钥证书
        """
        return verify_callback(params, self._config)

    async def request_v3(
        self,
        pathname: str,
        method: str = "POST",
        params: QueryParams = None,
        request_body: str = "",
        app_auth_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """调用 V3 接口

        Args:
            pathname: 接口路径，如 "/v3/alipay/trade/query"
            method: HTTP方法
            params: 查询参数
            request_body: JSON 请求体（原样参与签名与发送）
            app_auth_token: 应用授权令牌

        Returns:
            解析后的 JSON 响应，无法解析时返回 {"code": "40004", "msg": "解析响应失败"}

        Raises:
            AlipayRequestError: 网络错误或HTTP状态码非2xx
        """
        config = self._config
        method = method.upper()
        signed = sign_v3_headers(method, pathname, params, request_body, app_auth_token, config)

        url = config.endpoint.rstrip("/") + pathname
        query = encode_query(params)
        if query:
            url = f"{url}?{query}"

        headers = {"Content-Type": "application/json"}
        headers.update(signed.to_headers(config.app_id, app_auth_token, config.app_cert_sn))

        logger.info(f"[Alipay] V3 {method} {pathname}")
        text = await self._request(method, url, headers=headers, content=request_body or None)

        result = safe_json_parse(text)
        if not isinstance(result, dict):
            logger.warning(f"[Alipay] V3 响应解析失败: {pathname}")
            return {"code": AlipayResponse.V3_PARSE_ERROR_CODE, "msg": "解析响应失败"}
        return result

    def check_notify_sign_v3(
        self,
        timestamp: str,
        nonce: str,
        request_body: str,
        signature: str,
    ) -> bool:
        """验证 V3 回调签名

        Raises:
            ConfigurationError: 未配置支付宝公钥或公钥证书
        """
        return verify_callback_v3(timestamp, nonce, request_body, signature, self._config)

    def get_config(self) -> AlipayConfig:
        return self._config

    def update_config(self, **changes) -> AlipayConfig:
        """更新配置

        变更校验通过后整体替换当前配置；校验失败时原配置保持不变。

        Args:
            **changes: 字段名（或驼峰别名）到新值的映射

        Returns:
            新的配置对象

        Raises:
            pydantic.ValidationError: 变更后的配置不合法
            ConfigurationError: strict_cert 模式下证书SN推导失败
        """
        old_config = self._config
        new_config = apply_config_updates(old_config, **changes)

        if new_config.timeout != old_config.timeout:
            self._client.timeout = new_config.timeout
        if new_config.proxy_url != old_config.proxy_url:
            logger.warning("[Alipay] proxy_url 变更需重新创建 AlipaySdk 后生效")

        self._config = new_config
        logger.info(f"[Alipay] 配置已更新: {sorted(changes)}")
        return new_config
