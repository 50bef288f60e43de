"""通用辅助函数"""

import json
import secrets
import string
import time
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

from ..models.errors import ErrorCode, ErrorMessage, AlipayError


def create_request_id() -> str:
    """生成随机 UUID，用作 V3 请求 nonce"""
    return str(uuid.uuid4())


def format_timestamp(date: Optional[datetime] = None) -> str:
    """格式化网关时间戳 "YYYY-MM-DD HH:MM:SS"（UTC）"""
    d = date or datetime.now(timezone.utc)
    if d.tzinfo is not None:
        d = d.astimezone(timezone.utc)
    return d.strftime("%Y-%m-%d %H:%M:%S")


def current_millis() -> int:
    """当前毫秒时间戳"""
    return int(time.time() * 1000)


def format_amount(amount: int | float | str | Decimal) -> str:
    """格式化金额，保留两位小数（四舍五入）

    Raises:
        ValueError: 如果金额不是合法数字
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"无效的金额: {amount!r}") from e
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def generate_out_trade_no(prefix: str = "ORDER") -> str:
    """生成商户订单号: {prefix}_{毫秒时间戳}_{6位随机串}"""
    alphabet = string.ascii_lowercase + string.digits
    random_part = "".join(secrets.choice(alphabet) for _ in range(6))
    return f"{prefix}_{current_millis()}_{random_part}"


def validate_required_params(params: Mapping[str, Any], required: list[str]) -> None:
    """验证必填参数

    Raises:
        AlipayError: 如果有必填参数缺失或为空
    """
    missing = [key for key in required if not params.get(key)]
    if missing:
        raise AlipayError(ErrorMessage.missing_parameter(missing), code=ErrorCode.MISSING_PARAMETER)


def safe_json_parse(text: str, default: Any = None) -> Any:
    """安全地解析 JSON，失败时返回默认值"""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return default


def build_gateway_url(gateway: str, params: Mapping[str, str]) -> str:
    """生成带参数的网关 URL

    已有的同名查询参数会被覆盖。
    """
    parts = urlsplit(gateway)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(params)
    return urlunsplit(parts._replace(query=urlencode(query)))
