import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from reactivex import Observable, create
from reactivex import operators as ops
from reactivex.abc import ObserverBase, SchedulerBase
from reactivex.disposable import Disposable

from .action_types import ActionTypes
from .actions import get_action_type, is_action
from .errors import InvalidOperationError, TypeArgumentError
from .types import Enhancer, Listener, Reducer, Unsubscribe


S = TypeVar("S")

_logger = logging.getLogger(__name__)


class Store(Generic[S]):
    """
    狀態容器，管理應用狀態並通知訂閱者狀態變更。

    狀態只能透過 dispatch 改變；reducer 執行期間（Dispatching 階段）
    不允許讀取狀態、訂閱、取消訂閱或再次 dispatch。
    """

    def __init__(self, reducer: Reducer[S], preloaded_state: Optional[S] = None):
        """
        建立 store 並立即以初始化 action 讓所有 reducer 建立初始 slice。

        Args:
            reducer: 根 reducer
            preloaded_state: 可選的初始狀態
        """
        if not callable(reducer):
            raise TypeArgumentError(
                "Expected the reducer to be a function.", argument="reducer", value=reducer
            )

        self._reducer = reducer
        self._state = preloaded_state
        # 已提交的 listener 列表與待修改列表，在第一次修改前指向同一個 list
        self._current_listeners: List[Listener] = []
        self._next_listeners: List[Listener] = self._current_listeners
        self._is_dispatching = False

        self.dispatch({"type": ActionTypes.INIT})

    def _ensure_can_mutate_next_listeners(self) -> None:
        if self._next_listeners is self._current_listeners:
            self._next_listeners = list(self._current_listeners)

    def get_state(self) -> S:
        """
        獲取當前狀態的快照。

        Raises:
            InvalidOperationError: reducer 正在執行
        """
        if self._is_dispatching:
            raise InvalidOperationError(
                "You may not call store.get_state() while the reducer is executing. "
                "The reducer has already received the state as an argument. "
                "Pass it down from the top reducer instead of reading it from the store.",
                operation="get_state",
            )
        return self._state  # type: ignore[return-value]

    @property
    def state(self) -> S:
        return self.get_state()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        註冊一個 listener，每次 dispatch 完成後以無參數方式調用。

        在通知過程中新增的 listener 要到下一次 dispatch 才會被調用；
        被移除的 listener 不會出現在之後的通知中。

        Args:
            listener: 無參數的回調函數

        Returns:
            冪等的取消訂閱函數
        """
        if not callable(listener):
            raise TypeArgumentError(
                "Expected the listener to be a function.", argument="listener", value=listener
            )

        if self._is_dispatching:
            raise InvalidOperationError(
                "You may not call store.subscribe() while the reducer is executing. "
                "If you would like to be notified after the store has been updated, "
                "subscribe from outside and call store.get_state() in the callback "
                "to access the latest state.",
                operation="subscribe",
            )

        is_subscribed = True

        self._ensure_can_mutate_next_listeners()
        self._next_listeners.append(listener)

        def unsubscribe() -> None:
            nonlocal is_subscribed
            if not is_subscribed:
                return

            if self._is_dispatching:
                raise InvalidOperationError(
                    "You may not unsubscribe from a store listener while the reducer is executing.",
                    operation="unsubscribe",
                )

            is_subscribed = False

            self._ensure_can_mutate_next_listeners()
            # 以身分比對，相等但不同的 listener 不受影響
            index = next(i for i, registered in enumerate(self._next_listeners) if registered is listener)
            del self._next_listeners[index]

        return unsubscribe

    def dispatch(self, action: Any) -> Any:
        """
        分發一個動作，觸發狀態更新並通知所有 listener。

        Args:
            action: 帶有 type 的普通記錄（dict、Map 或 Action）

        Returns:
            傳入的 action，方便中介軟體轉發返回值
        """
        if not is_action(action):
            raise TypeArgumentError(
                "Actions must be plain objects. Use custom middleware for async actions.",
                argument="action",
                value=action,
            )

        if get_action_type(action) is None:
            raise TypeArgumentError(
                'Actions may not have an undefined "type" property. '
                "Have you misspelled a constant?",
                argument="action",
                value=action,
            )

        if self._is_dispatching:
            raise InvalidOperationError("Reducers may not dispatch actions.", operation="dispatch")

        try:
            self._is_dispatching = True
            self._state = self._reducer(self._state, action)
        finally:
            self._is_dispatching = False

        # 遍歷的是本次通知開始時的快照
        listeners = self._current_listeners = self._next_listeners
        for listener in listeners:
            listener()

        return action

    def replace_reducer(self, next_reducer: Reducer[S]) -> None:
        """
        替換 store 使用的 reducer，並重新初始化所有 slice。

        Args:
            next_reducer: 新的根 reducer
        """
        if not callable(next_reducer):
            raise TypeArgumentError(
                "Expected the next_reducer to be a function.",
                argument="next_reducer",
                value=next_reducer,
            )

        _logger.debug("replacing reducer with %r", next_reducer)
        self._reducer = next_reducer
        self.dispatch({"type": ActionTypes.REPLACE})

    def observable(self) -> Observable:
        """
        將 store 轉換為 reactivex 的 Observable。

        每個訂閱者在訂閱時立即收到當前狀態，之後每次 dispatch 再收到一次。
        取消訂閱（dispose）時同時從 store 移除 listener。

        Returns:
            發送完整狀態的 Observable
        """
        def subscribe(observer: ObserverBase, scheduler: Optional[SchedulerBase] = None) -> Disposable:
            def observe_state() -> None:
                observer.on_next(self.get_state())

            observe_state()
            return Disposable(self.subscribe(observe_state))

        return create(subscribe)

    def select(self, selector: Optional[Callable[[S], Any]] = None) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        Args:
            selector: 一個函數，接收整個狀態並返回希望觀察的部分。

        Returns:
            一個可觀察對象，只在選定的部分改變時發送。
        """
        source = self.observable()
        if selector is not None:
            source = source.pipe(ops.map(selector))
        return source.pipe(ops.distinct_until_changed())


class EnhancedStore(Generic[S]):
    """
    由增強器返回的 store：除 dispatch 外的所有操作都委派給底層 store。
    """

    def __init__(self, store: Store[S], dispatch: Callable[[Any], Any]) -> None:
        self._store = store
        self.dispatch = dispatch

    def get_state(self) -> S:
        return self._store.get_state()

    @property
    def state(self) -> S:
        return self._store.get_state()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self._store.subscribe(listener)

    def replace_reducer(self, next_reducer: Reducer[S]) -> None:
        self._store.replace_reducer(next_reducer)

    def observable(self) -> Observable:
        return self._store.observable()

    def select(self, selector: Optional[Callable[[S], Any]] = None) -> Observable:
        return self._store.select(selector)


def create_store(
    reducer: Reducer[S],
    preloaded_state: Any = None,
    enhancer: Optional[Enhancer] = None,
) -> Any:
    """
    創建一個新的 store。

    Args:
        reducer: 根 reducer
        preloaded_state: 可選的初始狀態；若為函數且未提供 enhancer，則視為 enhancer
        enhancer: 可選的 store 增強器，例如 apply_middleware(...) 的結果

    Returns:
        Store，或由 enhancer 產生的 store
    """
    if callable(preloaded_state) and enhancer is None:
        enhancer = preloaded_state
        preloaded_state = None

    if enhancer is not None:
        if not callable(enhancer):
            raise TypeArgumentError(
                "Expected the enhancer to be a function.", argument="enhancer", value=enhancer
            )
        # 完全交由 enhancer 控制建構流程
        return enhancer(create_store)(reducer, preloaded_state)

    return Store(reducer, preloaded_state)
