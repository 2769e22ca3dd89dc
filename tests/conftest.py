"""
Pytest configuration for Baseball Records.

Provides fixtures for:
- Deterministic record stores (fixed dates and insertion clock)
- Settings overrides through environment variables
- Root logger isolation for tests that call `configure_logging`
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Callable, Generator, Iterable, Iterator, Optional

import pytest

from baseball_records.clock import InsertionClock
from baseball_records.config import Settings, get_settings
from baseball_records.infrastructure.persistence import (
    InMemoryPersistenceProvider,
    PersistenceProvider,
)
from baseball_records.store import RecordStore

FIXED_NOW_MS = 1_760_745_600_000
FIXED_TODAY = date(2026, 10, 18)


@pytest.fixture
def provider() -> InMemoryPersistenceProvider:
    return InMemoryPersistenceProvider()


@pytest.fixture
def make_store(
    provider: InMemoryPersistenceProvider,
) -> Callable[..., RecordStore]:
    """
    Factory for loaded stores sharing the `provider` fixture by default.

    `dates` may be an iterable of dates handed out one per accepted record;
    otherwise every record is dated FIXED_TODAY. The insertion clock is frozen
    at FIXED_NOW_MS, so timestamps run FIXED_NOW_MS, FIXED_NOW_MS + 1, ...
    """

    def _make(
        dates: Optional[Iterable[date]] = None,
        backing: Optional[PersistenceProvider] = None,
        **kwargs,
    ) -> RecordStore:
        if dates is not None:
            date_iter: Iterator[date] = iter(dates)
            today = lambda: next(date_iter)  # noqa: E731
        else:
            today = lambda: FIXED_TODAY  # noqa: E731
        store = RecordStore(
            backing if backing is not None else provider,
            today=today,
            clock=InsertionClock(now_ms=lambda: FIXED_NOW_MS),
            **kwargs,
        )
        store.load()
        return store

    return _make


@pytest.fixture
def store(make_store: Callable[..., RecordStore]) -> RecordStore:
    return make_store()


@pytest.fixture
def restore_root_logging() -> Generator[None, None, None]:
    """Undo root logger changes made by `configure_logging`."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def settings_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path, restore_root_logging
) -> Generator[Settings, None, None]:
    """
    Point the cached settings at a file store inside `tmp_path`.
    """
    monkeypatch.setenv("RECORDS_BACKEND", "file")
    monkeypatch.setenv("RECORDS_DIR", os.fspath(tmp_path / "data"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_JSON", "false")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def now_ms() -> int:
    return FIXED_NOW_MS


@pytest.fixture
def today() -> date:
    return FIXED_TODAY
