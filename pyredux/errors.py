"""
pyredux 錯誤處理模組。

所有由 store、reducer 組合器與中介軟體拋出的異常都繼承自 ReduxError，
並攜帶結構化的 details，方便日誌記錄與錯誤報告。
"""
from typing import Any, Dict, Optional


class ReduxError(Exception):
    """所有 pyredux 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        將錯誤轉換為可序列化的字典。

        Returns:
            包含錯誤類型、訊息與細節的字典
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        return self.message


class TypeArgumentError(ReduxError, TypeError):
    """必要參數的類型不符合要求（listener、reducer、enhancer、action 等）。"""

    def __init__(self, message: str, argument: Optional[str] = None, value: Any = None) -> None:
        details: Dict[str, Any] = {}
        if argument is not None:
            details["argument"] = argument
            details["received_type"] = type(value).__name__
        super().__init__(message, details)


class InvalidOperationError(ReduxError, RuntimeError):
    """在不允許的階段調用了操作，例如 reducer 執行期間讀取狀態。"""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message, {"operation": operation} if operation else None)


class LifecycleViolationError(InvalidOperationError):
    """中介軟體在建構期間就嘗試 dispatch。"""


class ReducerError(ReduxError):
    """與 Reducer 契約相關的錯誤。"""

    def __init__(self, message: str, reducer_name: str, action_type: Any = None) -> None:
        super().__init__(message, {"reducer_name": reducer_name, "action_type": action_type})
        self.reducer_name = reducer_name
        self.action_type = action_type


class InvalidReducerError(ReducerError):
    """組合 reducer 時探測失敗：reducer 對初始化或未知 action 返回了 None。"""


class MissingStateError(ReducerError):
    """dispatch 期間某個 slice 的 reducer 返回了 None。"""
