# tests/test_background.py

from __future__ import annotations

import logging
import threading
from types import SimpleNamespace

import pytest

from shop_backend.core.state import AppState

from .fakes import FakePool


def test_submit_background_accepts_while_open(settings: SimpleNamespace) -> None:
    pool = FakePool()
    app_state = AppState(settings=settings, worker_pool=pool)

    assert app_state.submit_background(lambda ctx: None, description="order 1 receipt") is True
    assert len(pool.submitted) == 1


def test_submit_background_skips_after_stop(
    settings: SimpleNamespace, caplog: pytest.LogCaptureFixture
) -> None:
    pool = FakePool()
    pool.stop()
    app_state = AppState(settings=settings, worker_pool=pool)

    with caplog.at_level(logging.WARNING):
        ok = app_state.submit_background(lambda ctx: None, description="order 2 receipt")

    assert ok is False
    assert pool.submitted == []
    assert "order 2 receipt" in caplog.text


def test_submit_background_runs_on_real_pool(state: AppState) -> None:
    done = threading.Event()

    assert state.submit_background(lambda ctx: done.set(), description="ping")
    assert done.wait(2.0)

    state.worker_pool.stop()
    assert state.submit_background(lambda ctx: None, description="late") is False
