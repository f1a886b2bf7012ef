"""
pyredux：可預測的單一狀態容器。

狀態只能透過純函數 reducer 以 dispatch 更新，由 listener 觀察，
並可以用中介軟體鏈包裹 dispatch 來擴充行為。
"""

from .action_types import ActionTypes
from .actions import Action, bind_action_creators, create_action, get_action_type, is_action
from .compose import compose
from .config import ReduxSettings, get_settings
from .errors import (
    InvalidOperationError, InvalidReducerError, LifecycleViolationError,
    MissingStateError, ReducerError, ReduxError, TypeArgumentError,
)
from .immutable_utils import to_dict, to_immutable
from .middleware import (
    BaseMiddleware, LoggerMiddleware, MiddlewareAPI, ThunkMiddleware, apply_middleware,
)
from .reducers import combine_reducers, create_reducer, on
from .store import EnhancedStore, Store, create_store
from .utils import is_plain_object
from .warning import set_warning_sink, warning

# 匯出所有公開 API
__all__ = [
    # Errors
    "ReduxError", "TypeArgumentError", "InvalidOperationError",
    "LifecycleViolationError", "ReducerError", "InvalidReducerError",
    "MissingStateError",

    # Actions
    "Action", "ActionTypes", "create_action", "bind_action_creators",
    "get_action_type", "is_action", "is_plain_object",

    # Reducers
    "combine_reducers", "create_reducer", "on",

    # Middleware
    "apply_middleware", "compose", "MiddlewareAPI", "BaseMiddleware",
    "LoggerMiddleware", "ThunkMiddleware",

    # Store
    "Store", "EnhancedStore", "create_store",

    # Config & diagnostics
    "ReduxSettings", "get_settings", "warning", "set_warning_sink",

    # Immutable Utils
    "to_immutable", "to_dict",
]
