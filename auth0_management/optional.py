"""
可选字段 (presence vs absence)

Management API 对 "字段缺失" 和 "显式零值" 的处理不同：
- 不传 enabled: 服务端保持原值
- 传 enabled=false: 服务端关闭

因此所有可选字段默认为 UNSET，序列化时跳过；
只要不是 UNSET (包括 False / 0 / "" / None)，都会原样写入 JSON。
"""

from typing import Any, TypeVar

T = TypeVar("T")


class _Unset:
    """缺失标记 (单例)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Unset, ())


UNSET: Any = _Unset()
Unset = _Unset


def wrap(value: T) -> T:
    """
    标记字段为 "存在"

    Args:
        value: 任意值，包括零值

    Raises:
        ValueError: 传入 UNSET
    """
    if value is UNSET:
        raise ValueError("wrap() 不接受 UNSET，缺失字段请直接使用默认值")
    return value


def is_set(value: Any) -> bool:
    """字段是否存在"""
    return value is not UNSET


def unwrap(value: T | _Unset, default: T | None = None) -> T | None:
    """
    取出字段值

    缺失时返回 default (默认 None，不是类型零值)；需要零值时传入，例如 unwrap(v, 0)。
    按字段类型取零值请使用 Entity.get(name)，例如 Prompt().get("identifier_first") -> False。
    """
    if value is UNSET:
        return default
    return value
