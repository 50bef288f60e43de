"""
业务载荷类型

业务参数在边界处是任意结构的JSON数据，这里用递归类型别名描述，
规范化层据此在 映射 / 序列 / 标量 三种节点上递归。
"""

from typing import Union

JsonScalar = Union[None, bool, int, float, str]
JsonValue = Union[JsonScalar, list["JsonValue"], dict[str, "JsonValue"]]
JsonObject = dict[str, JsonValue]

# 发往网关前的规范参数集：全部为字符串键值，且不包含空值
CanonicalParams = dict[str, str]
