"""
证书描述模型

配置时（或首次使用时）从PEM证书推导一次，之后不再修改。
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class CertificateInfo:
    """证书描述信息

    Attributes:
        serial_number: 证书序列号（十六进制字符串）
        content: 证书原始PEM内容
        not_before: 有效期开始时间（UTC）
        not_after: 有效期结束时间（UTC）
        issuer: 签发者
        subject: 主题
    """

    serial_number: str
    content: str
    not_before: datetime
    not_after: datetime
    issuer: str
    subject: str

    def is_valid(self, at: Optional[datetime] = None) -> bool:
        """判断指定时间是否处于有效期内（默认当前时间）"""
        now = at or datetime.now(timezone.utc)
        return self.not_before <= now <= self.not_after

    def is_expired(self, at: Optional[datetime] = None) -> bool:
        now = at or datetime.now(timezone.utc)
        return now > self.not_after
