"""
基於 pyredux 的中介軟體定義模組。

此模組提供 apply_middleware 增強器，以及可直接使用的中介軟體，
用於在動作分發過程中插入自定義邏輯，例如日誌記錄與 thunk。
"""

import contextlib
import inspect
import logging
from typing import Any, Generator, List, Optional, Type, Union

from .actions import get_action_type
from .compose import compose
from .errors import LifecycleViolationError
from .immutable_utils import to_dict
from .store import EnhancedStore
from .types import (
    ActionContext, DispatchFunction, Enhancer, GetState, Middleware, MiddlewareFunction,
    NextDispatch, StoreAPI, StoreCreator, ThunkFunction,
)


_logger = logging.getLogger(__name__)


def _dispatch_during_construction(*args: Any, **kwargs: Any) -> Any:
    raise LifecycleViolationError(
        "Dispatching while constructing your middleware is not allowed. "
        "Other middleware would not be applied to this dispatch.",
        operation="dispatch",
    )


class MiddlewareAPI:
    """
    傳給每個中介軟體的 store 介面。

    dispatch 透過 _dispatch 間接調用：建構期間指向一個會拋錯的佔位函數，
    整條鏈組合完成後才寫入最終的 dispatch。
    """

    def __init__(self, get_state: GetState) -> None:
        self._get_state = get_state
        self._dispatch: DispatchFunction = _dispatch_during_construction

    def get_state(self) -> Any:
        return self._get_state()

    def dispatch(self, action: Any) -> Any:
        return self._dispatch(action)


def apply_middleware(*middlewares: Union[Middleware, Type[Middleware]]) -> Enhancer:
    """
    創建一個 store 增強器，以中介軟體鏈包裹 dispatch。

    第一個中介軟體位於最外層，最先看到每個分發的值。

    Args:
        *middlewares: 形如 store_api -> next -> action 的中介軟體，可以是類或實例

    Returns:
        store 增強器
    """
    def enhancer(create_store: StoreCreator) -> StoreCreator:
        def create_enhanced_store(reducer: Any, preloaded_state: Any = None) -> Any:
            store = create_store(reducer, preloaded_state)
            middleware_api = MiddlewareAPI(store.get_state)

            # 每個 store 各自實例化一次中介軟體
            chain: List[MiddlewareFunction] = []
            for mw in middlewares:
                inst = mw() if inspect.isclass(mw) else mw
                chain.append(inst(middleware_api))

            dispatch = compose(*chain)(store.dispatch)
            middleware_api._dispatch = dispatch

            return EnhancedStore(store, dispatch)
        return create_enhanced_store
    return enhancer


# ———— Base Middleware ————
class BaseMiddleware:
    """
    基礎中介類，定義所有中介可能實現的鉤子。

    中介軟體可以介入動作分發的流程，在動作到達 Reducer 前、
    動作處理完成後或出現錯誤時執行自定義邏輯。
    """

    def __call__(self, store_api: StoreAPI) -> MiddlewareFunction:
        def middleware(next_dispatch: NextDispatch) -> DispatchFunction:
            def dispatch(action: Any) -> Any:
                with self.action_context(action, store_api.get_state()) as context:
                    context['result'] = next_dispatch(action)
                    context['next_state'] = store_api.get_state()
                    return context['result']
            return dispatch
        return middleware

    def on_next(self, action: Any, prev_state: Any) -> None:
        """
        在 action 發送給 reducer 之前調用。

        Args:
            action: 正在 dispatch 的 Action
            prev_state: dispatch 之前的狀態
        """
        pass

    def on_complete(self, next_state: Any, action: Any) -> None:
        """
        在 reducer 處理完 action 且 listener 都已通知之後調用。

        Args:
            next_state: dispatch 之後的最新狀態
            action: 剛剛 dispatch 的 Action
        """
        pass

    def on_error(self, error: Exception, action: Any) -> None:
        """
        如果 dispatch 過程中拋出異常，則調用此鉤子；異常之後會繼續拋出。

        Args:
            error: 拋出的異常
            action: 導致異常的 Action
        """
        pass

    @contextlib.contextmanager
    def action_context(self, action: Any, prev_state: Any) -> Generator[ActionContext, None, None]:
        """
        以上下文管理器的形式處理一次 action 分發的生命週期。

        Args:
            action: 要分發的 Action
            prev_state: 分發前的狀態

        Yields:
            包含上下文數據的字典，內部可寫入 result 與 next_state
        """
        context: ActionContext = {
            'action': action,
            'prev_state': prev_state,
            'next_state': None,
            'result': None,
            'error': None
        }

        self.on_next(action, prev_state)

        try:
            yield context
        except Exception as err:
            context['error'] = err
            self.on_error(err, action)
            raise

        self.on_complete(context['next_state'], action)


# ———— LoggerMiddleware ————
class LoggerMiddleware(BaseMiddleware):
    """
    日誌中介，記錄每個 action 發送前和發送後的 state。

    使用場景:
    - 偵錯時需要觀察每次 state 的變化。
    - 確保 action 的執行順序正確。
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.logger = logger or _logger
        self.level = level

    def _describe(self, action: Any) -> Any:
        action_type = get_action_type(action)
        return action_type if action_type is not None else type(action).__name__

    def on_next(self, action: Any, prev_state: Any) -> None:
        if not self.logger.isEnabledFor(self.level):
            return
        self.logger.log(self.level, "▶️ dispatching %s", self._describe(action))
        self.logger.log(self.level, "🔄 state before %s: %s", self._describe(action), to_dict(prev_state))

    def on_complete(self, next_state: Any, action: Any) -> None:
        if not self.logger.isEnabledFor(self.level):
            return
        self.logger.log(self.level, "✅ state after %s: %s", self._describe(action), to_dict(next_state))

    def on_error(self, error: Exception, action: Any) -> None:
        self.logger.error("❌ error in %s: %s", self._describe(action), error)


# ———— ThunkMiddleware ————
class ThunkMiddleware:
    """
    支援 dispatch 函數 (thunk)，可以在 thunk 內多次 dispatch 或讀取狀態。

    範例:
        ```python
        def fetch_user(user_id):
            def thunk(dispatch, get_state):
                dispatch(request_user(user_id))
                try:
                    user = api.fetch_user(user_id)
                    dispatch(request_user_success(user))
                except ApiError as e:
                    dispatch(request_user_failure(str(e)))
            return thunk

        store.dispatch(fetch_user("user123"))
        ```
    """

    def __call__(self, store_api: StoreAPI) -> MiddlewareFunction:
        def middleware(next_dispatch: NextDispatch) -> DispatchFunction:
            def dispatch(action: Any) -> Any:
                if callable(action):
                    thunk: ThunkFunction = action
                    # thunk 內的 dispatch 會重新經過整條中介軟體鏈
                    return thunk(store_api.dispatch, store_api.get_state)
                return next_dispatch(action)
            return dispatch
        return middleware
