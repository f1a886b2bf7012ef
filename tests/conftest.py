"""Shared fixtures for the pyredux test suite."""

from __future__ import annotations

from typing import Iterator, List

import pytest

from pyredux import get_settings, set_warning_sink


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("PYREDUX_ENV", raising=False)
    monkeypatch.delenv("PYREDUX_WARNINGS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def warnings_log() -> Iterator[List[str]]:
    messages: List[str] = []
    previous = set_warning_sink(messages.append)
    yield messages
    set_warning_sink(previous)
