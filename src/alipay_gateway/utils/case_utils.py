"""
参数规范化工具

调用方使用驼峰（caller-case），网关使用下划线（gateway-case）。

转换规则：
- decamelize: 小写字母/数字后跟大写字母处断开；连续大写字母视为一组，
  只在组尾断开，避免出现重复分隔符（HTTPResponse -> http_response）
- camelize: 下划线后跟字母时去掉下划线并将该字母大写

只对普通 dict 的键做转换，list/tuple 逐元素递归，其余对象原样返回。
"""

import re
from collections.abc import Mapping
from typing import Any

from ..models.errors import CanonicalizationError
from ..models.payload import JsonValue

_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")
_UNDERSCORE_LETTER = re.compile(r"_([a-zA-Z])")


def decamelize(value: str, separator: str = "_") -> str:
    """驼峰转下划线

    Args:
        value: 驼峰字符串，如 "outTradeNo"
        separator: 分隔符

    Returns:
        下划线字符串，如 "out_trade_no"
    """
    result = _UPPER_RUN.sub(rf"\1{separator}\2", value)
    result = _LOWER_UPPER.sub(rf"\1{separator}\2", result)
    return result.lower()


def camelize(value: str) -> str:
    """下划线转驼峰，如 "out_trade_no" -> "outTradeNo" """
    return _UNDERSCORE_LETTER.sub(lambda m: m.group(1).upper(), value)


def _convert_keys(value: Any, convert) -> Any:
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise CanonicalizationError(
                    f"参数键必须是字符串: {key!r} ({type(key).__name__})"
                )
            result[convert(key)] = _convert_keys(item, convert)
        return result
    if isinstance(value, (list, tuple)):
        return [_convert_keys(item, convert) for item in value]
    return value


def snake_case_keys(value: JsonValue) -> JsonValue:
    """递归转换键名（驼峰 -> 下划线）"""
    return _convert_keys(value, decamelize)


def camel_case_keys(value: JsonValue) -> JsonValue:
    """递归转换键名（下划线 -> 驼峰）"""
    return _convert_keys(value, camelize)


# 网关/调用方方向的别名
to_gateway_case = snake_case_keys
to_caller_case = camel_case_keys


def remove_empty_values(params: Mapping[str, Any]) -> dict[str, Any]:
    """移除空值

    删除 None 和空字符串；0 与 False 是合法的金额/开关取值，必须保留。

    Args:
        params: 扁平参数字典

    Returns:
        新的参数字典
    """
    return {
        key: value
        for key, value in params.items()
        if value is not None and value != ""
    }
