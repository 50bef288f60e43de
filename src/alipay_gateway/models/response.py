"""
网关结果数据模型

- AlipayCommonResult: 经典网关通用结果（code/msg/sub_code/sub_msg）
- V3SignedHeaders: V3 请求签名头
- TradeStatus: 常用交易状态

字段说明参考: https://opendocs.alipay.com/common/02km9f
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_snake

from ..constants import AlipayResponse, AlipayV3Header


class TradeStatus(str, Enum):
    """常用交易状态"""

    WAIT_BUYER_PAY = "WAIT_BUYER_PAY"  # 交易创建，等待买家付款
    TRADE_CLOSED = "TRADE_CLOSED"  # 未付款交易超时关闭，或支付完成后全额退款
    TRADE_SUCCESS = "TRADE_SUCCESS"  # 交易支付成功
    TRADE_FINISHED = "TRADE_FINISHED"  # 交易结束，不可退款


class AlipayCommonResult(BaseModel):
    """网关通用结果

    同时接受下划线与驼峰两种键（SDK 默认返回驼峰）。
    业务字段（如 trade_no、out_trade_no）作为额外字段保留。
    """

    model_config = ConfigDict(extra="allow")

    code: str = Field(..., description="网关返回码")
    msg: str = Field("", description="响应讯息，Success 表示成功")
    sub_code: Optional[str] = Field(None, description="明细错误码")
    sub_msg: Optional[str] = Field(None, description="错误辅助信息")
    trace_id: Optional[str] = Field(None, description="trace id")

    @model_validator(mode="before")
    @classmethod
    def convert_keys(cls, data):
        """顶层驼峰键转为下划线（subCode -> sub_code）"""
        if isinstance(data, dict):
            return {to_snake(k): v for k, v in data.items()}
        return data

    @property
    def is_success(self) -> bool:
        return self.code == AlipayResponse.SUCCESS_CODE


class V3SignedHeaders(BaseModel):
    """V3 请求签名结果

    Attributes:
        timestamp: 毫秒时间戳（十进制字符串）
        nonce: 请求随机串
        signature: base64 签名
    """

    model_config = ConfigDict(frozen=True)

    timestamp: str
    nonce: str
    signature: str

    def to_headers(
        self,
        app_id: str,
        app_auth_token: Optional[str] = None,
        app_cert_sn: Optional[str] = None,
    ) -> dict[str, str]:
        """转换为 HTTP 请求头

        Args:
            app_id: 应用ID
            app_auth_token: 应用授权令牌（可选）
            app_cert_sn: 应用公钥证书SN（可选）

        Returns:
            请求头字典
        """
        headers = {
            AlipayV3Header.TIMESTAMP: self.timestamp,
            AlipayV3Header.NONCE: self.nonce,
            AlipayV3Header.SIGNATURE: self.signature,
            AlipayV3Header.APP_ID: app_id,
        }
        if app_auth_token:
            headers[AlipayV3Header.APP_AUTH_TOKEN] = app_auth_token
        if app_cert_sn:
            headers[AlipayV3Header.APP_CERT_SN] = app_cert_sn
        return headers
