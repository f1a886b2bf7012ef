from __future__ import annotations

import logging

import pytest

from pyredux import (
    InvalidOperationError,
    LifecycleViolationError,
    MissingStateError,
    ReduxError,
    ReduxSettings,
    TypeArgumentError,
    get_settings,
    warning,
)


def test_default_settings_enable_warnings() -> None:
    settings = get_settings()
    assert settings.env == "development"
    assert settings.warnings_enabled


def test_production_env_disables_warnings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYREDUX_ENV", "production")
    get_settings.cache_clear()
    assert not get_settings().warnings_enabled


def test_explicit_flag_wins() -> None:
    assert not ReduxSettings(env="development", warnings=False).warnings_enabled
    assert ReduxSettings(env="production", warnings=True).warnings_enabled


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_default_warning_sink_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pyredux"):
        warning("something looks off")
    assert [record.getMessage() for record in caplog.records] == ["something looks off"]
    assert caplog.records[0].name == "pyredux"


def test_error_hierarchy() -> None:
    assert issubclass(TypeArgumentError, TypeError)
    assert issubclass(InvalidOperationError, RuntimeError)
    assert issubclass(LifecycleViolationError, InvalidOperationError)
    assert issubclass(MissingStateError, ReduxError)


def test_error_to_dict() -> None:
    error = TypeArgumentError("Expected the listener to be a function.", argument="listener", value=3)
    assert error.to_dict() == {
        "error_type": "TypeArgumentError",
        "message": "Expected the listener to be a function.",
        "details": {"argument": "listener", "received_type": "int"},
    }
    assert str(error) == "Expected the listener to be a function."

    missing = MissingStateError("slice gone", reducer_name="count", action_type="RESET")
    assert missing.to_dict()["details"] == {"reducer_name": "count", "action_type": "RESET"}
