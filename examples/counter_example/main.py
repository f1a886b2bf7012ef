import logging

from counter_store import store
from counter_actions import (
    increment, increment_by, decrement, reset,
    load_count_request, load_count_success, load_count_failure,
)


def load_count(fetch):
    """以 thunk 模擬載入計數：先標記載入中，再根據結果 dispatch 成功或失敗。"""
    def thunk(dispatch, get_state):
        dispatch(load_count_request())
        try:
            dispatch(load_count_success(fetch()))
        except ValueError as err:
            dispatch(load_count_failure(str(err)))
        return get_state()["counter"]
    return thunk


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    # 訂閱計數變化
    store.select(lambda state: state["counter"].count).subscribe(
        on_next=lambda count: print(f"計數變化: {count}")
    )

    # 分發actions
    print("\n==== 開始測試基本操作 ====")
    store.dispatch(increment())
    store.dispatch(increment_by(5))
    store.dispatch(decrement())
    store.dispatch(reset(10))
    store.dispatch(increment_by(99))

    print("\n==== 開始測試 thunk ====")
    print(store.dispatch(load_count(lambda: 42)))

    # 打印最終狀態
    print("\n==== 最終狀態 ====")
    print(store.get_state())
