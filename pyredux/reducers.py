from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from immutables import Map

from .action_types import ActionTypes
from .actions import get_action_type
from .config import get_settings
from .errors import InvalidReducerError, MissingStateError
from .types import Reducer
from .utils import is_plain_object
from .warning import warning

S = TypeVar("S")


def create_reducer(initial_state: S, *handlers) -> Reducer[S]:
    """
    創建一個 reducer 函式，用於處理單一 slice 的狀態變更。

    Args:
        initial_state: 初始狀態，在收到 None 作為狀態時使用。
        *handlers: 一系列 (action_type, handler_fn) 元組或使用 on 函式創建的處理器。

    Returns:
        一個 reducer 函式，根據 action 的類型執行對應的處理邏輯。
    """
    action_handlers = {}  # 儲存 action 類型與處理函式的對應關係

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            # 如果 handler 是元組，則解構為 action 類型與處理函式
            action_type, handler_fn = handler
            action_handlers[action_type] = handler_fn
        else:
            # 如果 handler 是字典，則直接更新到 action_handlers
            action_handlers.update(handler)

    def reducer(state: Optional[S] = None, action: Any = None) -> S:
        if state is None:
            state = initial_state
        if action is None:
            return state

        handler = action_handlers.get(get_action_type(action))
        if handler:
            return handler(state, action)
        # 未知 action 一律原樣返回
        return state

    reducer.initial_state = initial_state  # type: ignore
    reducer.handlers = action_handlers  # type: ignore

    return reducer


def on(action_creator_or_type, handler: Callable[[Any, Any], Any]) -> Dict[Any, Callable[[Any, Any], Any]]:
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_creator_or_type: Action 創建器函式或 Action 類型字串。
        handler: 處理該 Action 的函式，接收 (state, action) 並返回新狀態。

    Returns:
        一個包含 {action_type: handler} 的字典。
    """
    if callable(action_creator_or_type) and hasattr(action_creator_or_type, 'type'):
        action_type = action_creator_or_type.type
    else:
        action_type = str(action_creator_or_type)

    return {action_type: handler}


def _undefined_state_error_message(key: str, action: Any) -> str:
    action_type = get_action_type(action)
    action_description = f'action "{action_type}"' if action_type is not None else "an action"

    return (
        f'Given {action_description}, reducer "{key}" returned None. '
        "To ignore an action, you must explicitly return the previous state."
    )


def _unexpected_state_shape_warning_message(
    input_state: Any,
    reducers: Mapping[str, Reducer],
    action: Any,
    unexpected_key_cache: Dict[str, bool],
) -> Optional[str]:
    reducer_keys = list(reducers)
    action_type = get_action_type(action)
    argument_name = (
        "preloaded_state argument passed to create_store"
        if action_type == ActionTypes.INIT
        else "previous state received by the reducer"
    )

    if not reducer_keys:
        return (
            "Store does not have a valid reducer. Make sure the argument passed "
            "to combine_reducers is a mapping whose values are reducers."
        )

    if not is_plain_object(input_state):
        return (
            f'The {argument_name} has unexpected type of "{type(input_state).__name__}". '
            "Expected argument to be a mapping with the following "
            f'keys: "{", ".join(reducer_keys)}"'
        )

    unexpected_keys: List[str] = [
        key for key in input_state
        if key not in reducers and not unexpected_key_cache.get(key)
    ]
    for key in unexpected_keys:
        unexpected_key_cache[key] = True

    # 替換 reducer 時狀態形狀本來就會改變
    if action_type == ActionTypes.REPLACE:
        return None

    if unexpected_keys:
        return (
            f'Unexpected {"keys" if len(unexpected_keys) > 1 else "key"} '
            f'"{", ".join(map(str, unexpected_keys))}" found in {argument_name}. '
            "Expected to find one of the known reducer keys instead: "
            f'"{", ".join(reducer_keys)}". Unexpected keys will be ignored.'
        )
    return None


def _assert_reducer_shape(reducers: Mapping[str, Reducer]) -> None:
    for key, reducer in reducers.items():
        initial_state = reducer(None, {"type": ActionTypes.INIT})
        if initial_state is None:
            raise InvalidReducerError(
                f'Reducer "{key}" returned None during initialization. '
                "If the state passed to the reducer is None, you must "
                "explicitly return the initial state. The initial state may "
                "not be None.",
                reducer_name=key,
                action_type=ActionTypes.INIT,
            )

        probe_type = ActionTypes.probe_unknown_action()
        if reducer(None, {"type": probe_type}) is None:
            raise InvalidReducerError(
                f'Reducer "{key}" returned None when probed with a random type. '
                f'Don\'t try to handle {ActionTypes.INIT} or other actions in the "@@pyredux/*" '
                "namespace. They are considered private. Instead, you must return the "
                "current state for any unknown actions, unless it is None, "
                "in which case you must return the initial state, regardless of the "
                "action type. The initial state may not be None.",
                reducer_name=key,
                action_type=probe_type,
            )


def combine_reducers(reducers: Mapping[str, Any]) -> Reducer[Any]:
    """
    將多個 slice reducer 組合為一個根 reducer。

    每個鍵對應狀態樹中的一個 slice，由同名的 reducer 獨立管理。
    所有 reducer 都會收到每一個 action。

    Args:
        reducers: slice 名稱到 reducer 的映射

    Returns:
        組合後的 reducer；當沒有任何 slice 改變時返回原本的狀態對象

    Raises:
        InvalidReducerError: 某個 reducer 在初始化或遇到未知 action 時返回 None
    """
    warnings_enabled = get_settings().warnings_enabled

    final_reducers: Dict[str, Reducer] = {}
    for key, reducer in reducers.items():
        if warnings_enabled and reducer is None:
            warning(f'No reducer provided for key "{key}"')
        if callable(reducer):
            final_reducers[key] = reducer

    unexpected_key_cache: Dict[str, bool] = {}

    _assert_reducer_shape(final_reducers)

    def combination(state: Any = None, action: Any = None) -> Any:
        if state is None:
            state = {}

        if warnings_enabled:
            warning_message = _unexpected_state_shape_warning_message(
                state, final_reducers, action, unexpected_key_cache
            )
            if warning_message:
                warning(warning_message)

        has_changed = False
        next_state = {}
        for key, reducer in final_reducers.items():
            previous_state_for_key = state.get(key) if isinstance(state, Mapping) else None
            next_state_for_key = reducer(previous_state_for_key, action)
            if next_state_for_key is None:
                raise MissingStateError(
                    _undefined_state_error_message(key, action),
                    reducer_name=key,
                    action_type=get_action_type(action),
                )
            next_state[key] = next_state_for_key
            has_changed = has_changed or next_state_for_key is not previous_state_for_key

        has_changed = has_changed or not isinstance(state, Mapping)
        if not has_changed:
            return state
        return Map(next_state) if isinstance(state, Map) else next_state

    return combination
