"""
基於 pyredux 的 Action 定義模組。

此模組提供 Action 類別、創建 Action 的工具，以及將 action 創建器
綁定到 dispatch 的函數。Actions 是描述狀態變更意圖的不可變對象。
"""
import functools
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Union

from .errors import TypeArgumentError
from .immutable_utils import to_immutable
from .types import P, ActionCreator, DispatchFunction
from .utils import is_plain_object


class Action(Generic[P]):
    """
    表示一個有類型和可選負載的動作。

    泛型參數:
        P: 負載的類型

    屬性:
        type: 動作的類型字符串
        payload: 動作的負載數據（可選）
    """
    __slots__ = ('type', 'payload')

    def __init__(self, type: str, payload: Optional[P] = None):
        super().__setattr__('type', type)
        super().__setattr__('payload', payload)

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Cannot delete immutable instance attribute '{name}'")

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.type == other.type and self.payload == other.payload

    def __hash__(self):
        return hash((self.type, self.payload))

    def __repr__(self):
        return f"Action(type='{self.type}', payload={repr(self.payload)})"


def is_action(value: Any) -> bool:
    """判斷值是否能被 store 直接 dispatch（普通記錄或 Action 實例）。"""
    return isinstance(value, Action) or is_plain_object(value)


def get_action_type(action: Any) -> Any:
    """
    取得 action 的類型。

    Args:
        action: dict、Map 或 Action 實例

    Returns:
        類型值；缺少類型時返回 None
    """
    if isinstance(action, Action):
        return action.type
    if isinstance(action, Mapping):
        return action.get("type")
    return None


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> ActionCreator:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action

    範例:
        >>> increment = create_action("[Counter] Increment")
        >>> increment()  # 返回 Action(type="[Counter] Increment", payload=None)
        >>>
        >>> add = create_action("[Counter] Add", lambda amount: amount)
        >>> add(5)  # 返回 Action(type="[Counter] Add", payload=5)
    """
    def action_creator(*args: Any, **kwargs: Any) -> Action[Any]:
        if prepare_fn:
            payload = prepare_fn(*args, **kwargs)
        elif len(args) == 1 and not kwargs:
            payload = args[0]
        elif args or kwargs:
            payload = dict(zip(range(len(args)), args))
            payload.update(kwargs)
        else:
            # 無參數，無負載
            return Action(action_type)
        return Action(action_type, to_immutable(payload))

    # 添加 type 屬性以便於識別
    action_creator.type = action_type  # type: ignore

    return action_creator  # type: ignore


def _bind_action_creator(action_creator: Callable[..., Any], dispatch: DispatchFunction) -> Callable[..., Any]:
    @functools.wraps(action_creator)
    def bound(*args: Any, **kwargs: Any) -> Any:
        return dispatch(action_creator(*args, **kwargs))
    return bound


def bind_action_creators(
    action_creators: Union[Callable[..., Any], Mapping[str, Any]],
    dispatch: DispatchFunction,
) -> Union[Callable[..., Any], Dict[str, Callable[..., Any]]]:
    """
    將 action 創建器與 dispatch 綁定，調用後直接分發生成的 action。

    Args:
        action_creators: 單個創建器函數，或名稱到創建器的映射
        dispatch: store 的 dispatch 函數

    Returns:
        綁定後的函數；若傳入映射則返回同形狀的字典（非函數項會被略過）
    """
    if callable(action_creators):
        return _bind_action_creator(action_creators, dispatch)

    if not isinstance(action_creators, Mapping):
        received = "None" if action_creators is None else type(action_creators).__name__
        raise TypeArgumentError(
            f"bind_action_creators expected a mapping or a function, instead received {received}.",
            argument="action_creators",
            value=action_creators,
        )

    return {
        key: _bind_action_creator(creator, dispatch)
        for key, creator in action_creators.items()
        if callable(creator)
    }
