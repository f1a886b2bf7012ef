from __future__ import annotations

import logging
from typing import Any, Callable, List

import pytest

from pyredux import (
    BaseMiddleware,
    EnhancedStore,
    LifecycleViolationError,
    LoggerMiddleware,
    ThunkMiddleware,
    apply_middleware,
    combine_reducers,
    compose,
    create_store,
)
from pyredux.types import Middleware

from .sample_reducers import counter, todos


def _tagging_middleware(tag: str, log: List[str]) -> Callable[..., Any]:
    def middleware(store_api: Any) -> Callable[..., Any]:
        def wrap(next_dispatch: Callable[[Any], Any]) -> Callable[[Any], Any]:
            def dispatch(action: Any) -> Any:
                log.append(tag)
                return next_dispatch(action)
            return dispatch
        return wrap
    return middleware


def test_middleware_runs_outer_to_inner_before_reducer() -> None:
    log: List[str] = []

    def reducer(state: Any = None, action: Any = None) -> int:
        if action["type"] == "PING":
            log.append("reducer")
        return 0 if state is None else state

    store = create_store(
        reducer,
        apply_middleware(_tagging_middleware("A", log), _tagging_middleware("B", log)),
    )
    store.dispatch({"type": "PING"})
    assert log == ["A", "B", "reducer"]


def test_enhanced_store_delegates_to_underlying_store() -> None:
    store = create_store(combine_reducers({"count": counter}), apply_middleware())
    assert isinstance(store, EnhancedStore)

    calls: List[int] = []
    store.subscribe(lambda: calls.append(store.get_state()["count"]))
    store.dispatch({"type": "INC"})
    assert calls == [1]
    assert store.state == {"count": 1}

    store.replace_reducer(combine_reducers({"count": counter, "todos": todos}))
    assert store.get_state() == {"count": 1, "todos": ()}


def test_preloaded_state_reaches_underlying_store() -> None:
    store = create_store(counter, 10, apply_middleware())
    assert store.get_state() == 10


def test_middleware_api_exposes_state_and_full_chain_dispatch() -> None:
    seen_states: List[Any] = []
    log: List[str] = []

    def redirect(store_api: Any) -> Callable[..., Any]:
        def wrap(next_dispatch: Callable[[Any], Any]) -> Callable[[Any], Any]:
            def dispatch(action: Any) -> Any:
                seen_states.append(store_api.get_state())
                if action["type"] == "DOUBLE_INC":
                    store_api.dispatch({"type": "INC"})
                    return store_api.dispatch({"type": "INC"})
                return next_dispatch(action)
            return dispatch
        return wrap

    store = create_store(
        counter, apply_middleware(redirect, _tagging_middleware("inner", log))
    )
    store.dispatch({"type": "DOUBLE_INC"})
    assert store.get_state() == 2
    # 透過 store_api 的 dispatch 會重新走過整條鏈
    assert log == ["inner", "inner"]
    assert seen_states == [0, 0, 1]


def test_dispatch_during_middleware_construction_is_rejected() -> None:
    def eager(store_api: Any) -> Callable[..., Any]:
        store_api.dispatch({"type": "INC"})
        return lambda next_dispatch: next_dispatch

    with pytest.raises(LifecycleViolationError):
        create_store(counter, apply_middleware(eager))


def test_middleware_can_short_circuit() -> None:
    def swallow(store_api: Any) -> Callable[..., Any]:
        def wrap(next_dispatch: Callable[[Any], Any]) -> Callable[[Any], Any]:
            def dispatch(action: Any) -> Any:
                if action["type"] == "IGNORED":
                    return "swallowed"
                return next_dispatch(action)
            return dispatch
        return wrap

    store = create_store(counter, apply_middleware(swallow))
    assert store.dispatch({"type": "IGNORED"}) == "swallowed"
    assert store.get_state() == 0


def test_middleware_classes_are_instantiated_per_store() -> None:
    instances: List[Any] = []

    class Recording(BaseMiddleware):
        def __init__(self) -> None:
            instances.append(self)

    enhancer = apply_middleware(Recording)
    create_store(counter, enhancer)
    create_store(counter, enhancer)
    assert len(instances) == 2
    assert instances[0] is not instances[1]


def test_base_middleware_hooks() -> None:
    events: List[Any] = []

    class Hooks(BaseMiddleware):
        def on_next(self, action: Any, prev_state: Any) -> None:
            events.append(("next", action["type"], prev_state))

        def on_complete(self, next_state: Any, action: Any) -> None:
            events.append(("complete", action["type"], next_state))

        def on_error(self, error: Exception, action: Any) -> None:
            events.append(("error", action["type"], str(error)))

    def reducer(state: Any = None, action: Any = None) -> int:
        if action["type"] == "FAIL":
            raise ValueError("bad action")
        return counter(state, action)

    store = create_store(reducer, apply_middleware(Hooks))
    result = store.dispatch({"type": "INC"})
    assert result == {"type": "INC"}

    with pytest.raises(ValueError):
        store.dispatch({"type": "FAIL"})

    assert events == [
        ("next", "INC", 0),
        ("complete", "INC", 1),
        ("next", "FAIL", 1),
        ("error", "FAIL", "bad action"),
    ]


def test_thunk_middleware_runs_functions() -> None:
    store = create_store(counter, apply_middleware(ThunkMiddleware))

    def increment_twice(dispatch: Callable[[Any], Any], get_state: Callable[[], Any]) -> Any:
        dispatch({"type": "INC"})
        dispatch({"type": "INC"})
        return get_state()

    assert store.dispatch(increment_twice) == 2
    assert store.get_state() == 2


def test_thunk_can_dispatch_nested_thunks() -> None:
    store = create_store(counter, apply_middleware(ThunkMiddleware()))

    def inner(dispatch: Callable[[Any], Any], get_state: Callable[[], Any]) -> str:
        dispatch({"type": "INC"})
        return "inner done"

    def outer(dispatch: Callable[[Any], Any], get_state: Callable[[], Any]) -> Any:
        return dispatch(inner)

    assert store.dispatch(outer) == "inner done"
    assert store.get_state() == 1


def test_logger_middleware_logs_state_transitions(caplog: pytest.LogCaptureFixture) -> None:
    store = create_store(
        combine_reducers({"count": counter}), apply_middleware(LoggerMiddleware)
    )
    with caplog.at_level(logging.INFO, logger="pyredux.middleware"):
        store.dispatch({"type": "INC"})

    messages = [record.getMessage() for record in caplog.records]
    assert any("dispatching INC" in message for message in messages)
    assert any("state before INC: {'count': 0}" in message for message in messages)
    assert any("state after INC: {'count': 1}" in message for message in messages)


def test_logger_middleware_logs_errors(caplog: pytest.LogCaptureFixture) -> None:
    def reducer(state: Any = None, action: Any = None) -> int:
        if action["type"] == "FAIL":
            raise RuntimeError("kaboom")
        return 0

    store = create_store(reducer, apply_middleware(LoggerMiddleware))
    with caplog.at_level(logging.INFO, logger="pyredux.middleware"):
        with pytest.raises(RuntimeError):
            store.dispatch({"type": "FAIL"})

    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "kaboom" in errors[0].getMessage()


def test_enhancers_compose() -> None:
    log: List[str] = []
    enhancer = compose(
        apply_middleware(_tagging_middleware("outer", log)),
        apply_middleware(_tagging_middleware("inner", log)),
    )
    store = create_store(counter, enhancer)
    store.dispatch({"type": "INC"})
    assert log == ["outer", "inner"]
    assert store.get_state() == 1


def test_logger_middleware_skips_state_conversion_when_level_disabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    converted: List[Any] = []

    def recording_to_dict(value: Any) -> Any:
        converted.append(value)
        return value

    monkeypatch.setattr("pyredux.middleware.to_dict", recording_to_dict)
    quiet = logging.getLogger("pyredux.tests.quiet")
    quiet.setLevel(logging.WARNING)

    store = create_store(counter, apply_middleware(LoggerMiddleware(logger=quiet)))
    store.dispatch({"type": "INC"})

    assert converted == []
    assert store.get_state() == 1


def test_stock_middleware_satisfy_middleware_protocol() -> None:
    assert isinstance(ThunkMiddleware(), Middleware)
    assert isinstance(LoggerMiddleware(), Middleware)
    assert isinstance(_tagging_middleware("A", []), Middleware)
    assert not isinstance("not middleware", Middleware)
