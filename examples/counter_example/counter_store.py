from pyredux import (
    LoggerMiddleware, ThunkMiddleware, apply_middleware, combine_reducers, create_store,
)
from counter_reducers import counter_reducer

# 創建Store：thunk 在外層，日誌只記錄真正到達 reducer 的 action
store = create_store(
    combine_reducers({"counter": counter_reducer}),
    apply_middleware(ThunkMiddleware, LoggerMiddleware),
)
