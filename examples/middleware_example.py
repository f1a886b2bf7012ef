"""
pyredux 範例：待辦事項應用，展示中介軟體、thunk 與 action 綁定的使用
"""

import logging
import time
import uuid
from typing import Any, List

from immutables import Map

from pyredux import (
    BaseMiddleware,
    LoggerMiddleware,
    ThunkMiddleware,
    apply_middleware,
    bind_action_creators,
    combine_reducers,
    create_action,
    create_reducer,
    create_store,
    on,
    to_dict,
)


# ====== 1. 定義 Actions ======
add_todo = create_action("addTodo", lambda text: text)
toggle_todo = create_action("toggleTodo", lambda id: id)
remove_todo = create_action("removeTodo", lambda id: id)
todos_warning = create_action("todosWarning", lambda count: count)


# ====== 2. 定義 Reducer ======
todo_initial_state = Map(todos=(), last_updated=None, history=(), max_todos=5)


def handle_add_todo(state: Map, action) -> Map:
    new_todo = Map(id=str(uuid.uuid4()), text=action.payload, completed=False)
    new_todos = state["todos"] + (new_todo,)
    return (state
            .set("todos", new_todos)
            .set("last_updated", time.time())
            .set("history", state["history"] + (len(new_todos),)))


def handle_toggle_todo(state: Map, action) -> Map:
    new_todos = tuple(
        todo.set("completed", not todo["completed"]) if todo["id"] == action.payload else todo
        for todo in state["todos"]
    )
    return state.set("todos", new_todos).set("last_updated", time.time())


def handle_remove_todo(state: Map, action) -> Map:
    new_todos = tuple(todo for todo in state["todos"] if todo["id"] != action.payload)
    return (
        state.set("todos", new_todos)
        .set("last_updated", time.time())
        .set("history", state["history"] + (len(new_todos),))
    )


todo_reducer = create_reducer(
    todo_initial_state,
    on(add_todo, handle_add_todo),
    on(toggle_todo, handle_toggle_todo),
    on(remove_todo, handle_remove_todo),
)


def warnings_reducer(state=None, action=None):
    if state is None:
        state = ()
    if getattr(action, "type", None) == todos_warning.type:
        return state + (action.payload,)
    return state


# ====== 3. 定義 Thunk ======
def validate_and_add_todo(text: str):
    def thunk(dispatch, get_state):
        state = get_state()
        current_todo_count = len(state["todo"]["todos"])
        max_todos = state["todo"]["max_todos"]

        if not text.strip():
            print("[提示] 輸入的待辦事項不可為空")
            return None

        if current_todo_count >= max_todos:
            return dispatch(todos_warning(current_todo_count))
        return dispatch(add_todo(text))

    return thunk


# ====== 4. 自訂中介軟體 ======
class AnalyticsMiddleware(BaseMiddleware):
    """行為埋點中介，記錄每個到達 reducer 的 action 類型。"""

    def __init__(self) -> None:
        self.events: List[Any] = []

    def on_complete(self, next_state: Any, action: Any) -> None:
        self.events.append((action.type, len(next_state["todo"]["todos"])))


analytics = AnalyticsMiddleware()


# ====== 5. 建立 Store ======
store = create_store(
    combine_reducers({"todo": todo_reducer, "warnings": warnings_reducer}),
    apply_middleware(ThunkMiddleware, analytics, LoggerMiddleware),
)
actions = bind_action_creators(
    {"add": add_todo, "toggle": toggle_todo, "remove": remove_todo}, store.dispatch
)

store.select(lambda state: len(state["todo"]["todos"])).subscribe(
    on_next=lambda count: print(f"待辦事項數量: {count}")
)


# ====== 6. 執行操作示例 ======
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print("開始執行待辦事項範例...")
    actions["add"]("學習 pyredux")
    store.dispatch(validate_and_add_todo("完成範例程式"))
    actions["toggle"](store.get_state()["todo"]["todos"][0]["id"])
    for i in range(4):
        store.dispatch(validate_and_add_todo(f"快速新增{i}"))
    actions["remove"](store.get_state()["todo"]["todos"][1]["id"])
    store.dispatch(validate_and_add_todo(""))

    print("\n==== 最終狀態 ====")
    print(f"Todo 字典: {to_dict(store.get_state()['todo'])}")
    print(f"警告: {store.get_state()['warnings']}")

    print("\n==== 埋點紀錄 ====")
    for action_type, todo_count in analytics.events:
        print(f"動作: {action_type}, 待辦事項數量: {todo_count}")
