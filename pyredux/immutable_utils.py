# pyredux/immutable_utils.py
from typing import Any

from immutables import Map


def to_immutable(obj: Any) -> Any:
    """將任何對象轉換為不可變形式"""
    if isinstance(obj, (dict, Map)):
        # 字典轉為 Map
        return Map({k: to_immutable(v) for k, v in obj.items()})
    elif isinstance(obj, (list, tuple)):
        # 列表轉為元組
        return tuple(to_immutable(i) for i in obj)
    elif isinstance(obj, (set, frozenset)):
        # 集合轉為凍結集合
        return frozenset(to_immutable(i) for i in obj)
    # 其他類型直接返回
    return obj


def to_dict(obj: Any) -> Any:
    """將 Map 及其巢狀結構轉換為普通字典"""
    if isinstance(obj, (Map, dict)):
        return {k: to_dict(v) for k, v in obj.items()}
    elif isinstance(obj, tuple):
        return [to_dict(i) for i in obj]
    elif isinstance(obj, frozenset):
        return {to_dict(i) for i in obj}
    return obj
