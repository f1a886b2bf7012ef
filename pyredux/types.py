"""
pyredux 共用的類型定義。
"""
from typing import Any, Callable, Optional, TypeVar

from typing_extensions import Protocol, TypedDict, runtime_checkable

S = TypeVar("S")
P = TypeVar("P")

# reducer 以 None 表示「尚無 slice」，且永遠不可返回 None
Reducer = Callable[[Optional[S], Any], S]
Listener = Callable[[], None]
Unsubscribe = Callable[[], None]
DispatchFunction = Callable[[Any], Any]
NextDispatch = DispatchFunction
MiddlewareFunction = Callable[[NextDispatch], DispatchFunction]
GetState = Callable[[], Any]
ThunkFunction = Callable[[DispatchFunction, GetState], Any]
StoreCreator = Callable[..., Any]
Enhancer = Callable[[StoreCreator], StoreCreator]


class StoreAPI(Protocol):
    """中介軟體可見的 store 介面。"""

    def get_state(self) -> Any: ...

    def dispatch(self, action: Any) -> Any: ...


@runtime_checkable
class Middleware(Protocol):
    """中介軟體協議：store_api -> next -> action -> result。"""

    def __call__(self, store_api: StoreAPI) -> MiddlewareFunction: ...


class ActionCreator(Protocol):
    type: str

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


class ActionContext(TypedDict, total=False):
    action: Any
    prev_state: Any
    next_state: Any
    result: Any
    error: Optional[Exception]
