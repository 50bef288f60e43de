"""
SDK 凭证配置模型

对应一个应用的全部密钥材料与网关参数。配置对象不可变，
更新配置时整体替换（model_copy），从不原地修改。

字段名使用 snake_case，同时接受 camelCase 别名（如 appId、alipayPublicKey）。
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

from ..constants import (
    AlipayGatewayURL,
    DEFAULT_CHARSET,
    DEFAULT_KEY_TYPE,
    DEFAULT_SIGN_TYPE,
    DEFAULT_VERSION,
)

SignType = Literal["RSA", "RSA2"]
KeyType = Literal["PKCS1", "PKCS8"]


class AlipayConfig(BaseModel):
    """支付宝SDK配置

    验签公钥优先级：支付宝公钥证书 > 支付宝公钥字符串。
    未知字段（包括拼错的字段名）校验时直接报错。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    # 应用
    app_id: str = Field(..., description="应用ID")
    private_key: str = Field(..., repr=False, description="应用私钥（PEM或去头尾的base64）")
    sign_type: SignType = Field(DEFAULT_SIGN_TYPE, description="签名算法，RSA=SHA1，RSA2=SHA256")
    key_type: KeyType = Field(DEFAULT_KEY_TYPE, description="私钥格式，PKCS8=PRIVATE KEY，PKCS1=RSA PRIVATE KEY")

    # 验签
    alipay_public_key: Optional[str] = Field(None, description="支付宝公钥")

    # 网关
    gateway: str = Field(AlipayGatewayURL.GATEWAY, description="经典网关地址")
    endpoint: str = Field(AlipayGatewayURL.ENDPOINT, description="V3 endpoint")
    timeout: float = Field(5.0, gt=0, description="请求超时时间（秒）")
    proxy_url: Optional[str] = Field(None, description="HTTP代理地址")
    camelcase: bool = Field(True, description="是否把网关返回的下划线key转换为驼峰")
    charset: Literal["utf-8"] = Field(DEFAULT_CHARSET, description="编码，仅支持utf-8")
    version: Literal["1.0"] = Field(DEFAULT_VERSION, description="接口版本")

    # 证书模式
    app_cert_content: Optional[str] = Field(None, repr=False, description="应用公钥证书内容")
    app_cert_sn: Optional[str] = Field(None, description="应用公钥证书SN")
    alipay_root_cert_content: Optional[str] = Field(None, repr=False, description="支付宝根证书内容")
    alipay_root_cert_sn: Optional[str] = Field(None, description="支付宝根证书SN")
    alipay_public_cert_content: Optional[str] = Field(None, repr=False, description="支付宝公钥证书内容")
    alipay_cert_sn: Optional[str] = Field(None, description="支付宝公钥证书SN")
    strict_cert: bool = Field(False, description="证书SN推导失败时是否直接报错")

    # 加密
    encrypt_key: Optional[str] = Field(None, repr=False, description="AES密钥（base64）")

    @field_validator("app_id", "private_key")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("不能为空")
        return value

    @field_validator("sign_type", "key_type", mode="before")
    @classmethod
    def upper_case(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def uses_cert_mode(self) -> bool:
        """是否配置了证书模式"""
        return bool(self.app_cert_content or self.alipay_public_cert_content)

    def with_updates(self, **changes) -> "AlipayConfig":
        """返回应用了变更后的新配置

        变更会经过完整校验，原配置对象保持不变。

        Args:
            **changes: 字段名（或驼峰别名）到新值的映射

        Returns:
            新的配置对象
        """
        data = self.model_dump()
        for key, value in changes.items():
            data[to_snake(key)] = value
        return type(self).model_validate(data)
