# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from shop_backend.core.state import AppState
from shop_backend.workerpool import WorkerPool


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="shop-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        http_enabled=False,
        server_host="127.0.0.1",
        server_port=0,
        worker_count=2,
        shutdown_timeout_seconds=1.0,
    )


@pytest.fixture()
def pool() -> Iterator[WorkerPool]:
    """Two-worker pool that is always stopped, even if the test fails."""
    p = WorkerPool(2, name="test")
    try:
        yield p
    finally:
        p.stop()


@pytest.fixture()
def state(settings: SimpleNamespace) -> Iterator[AppState]:
    s = AppState(settings=settings, worker_pool=WorkerPool(settings.worker_count, name="state"))
    try:
        yield s
    finally:
        s.worker_pool.stop()
