import functools
from typing import Any, Callable


def _identity(arg: Any) -> Any:
    return arg


def compose(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """
    由右至左組合單參數函數。

    compose(f, g, h)(x) 等價於 f(g(h(x)))；最內層函數接收全部參數，
    外層函數只接收內層的返回值。

    Args:
        *funcs: 要組合的函數

    Returns:
        組合後的函數；沒有函數時返回恆等函數，只有一個時返回該函數本身
    """
    if not funcs:
        return _identity

    if len(funcs) == 1:
        return funcs[0]

    # 最左邊的函數是組合後的最外層
    return functools.reduce(
        lambda outer, inner: lambda *args, **kwargs: outer(inner(*args, **kwargs)),
        funcs,
    )
