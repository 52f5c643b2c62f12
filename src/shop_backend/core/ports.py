# src/shop_backend/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the application layer.

Shutdown and background submission depend on Protocols instead of the
concrete pool / HTTP runner. This keeps them swappable and easy to fake in tests.
"""

from typing import Protocol

from ..workerpool import Task


class TaskSubmitter(Protocol):
    """Anything that accepts background tasks (normally a WorkerPool)."""

    def submit(self, task: Task | None) -> None: ...


class StoppablePool(TaskSubmitter, Protocol):
    def stop(self, *, drain: bool = True) -> None: ...


class BackgroundServer(Protocol):
    """
    A network listener running in its own thread.

    stop() only asks it to stop accepting connections; join() waits for it.
    """

    def stop(self) -> None: ...
    def join(self, timeout: float | None = None) -> bool: ...
