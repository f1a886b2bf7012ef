from typing import Any

from immutables import Map


def is_plain_object(value: Any) -> bool:
    """
    判斷值是否為普通資料記錄。

    只有精確的 dict（不含子類）與 immutables.Map 才算普通記錄；
    類別實例、列表與基本型別都不算。
    """
    return type(value) is dict or isinstance(value, Map)
