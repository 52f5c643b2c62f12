# src/shop_backend/workerpool/errors.py

from __future__ import annotations


class WorkerPoolError(Exception):
    """Base class for worker pool errors."""


class PoolStoppedError(WorkerPoolError):
    """Raised by submit() once the pool no longer accepts work."""

    def __init__(self, message: str = "workerpool: pool is stopped") -> None:
        super().__init__(message)


class TaskCancelledError(WorkerPoolError):
    """Raised by CancellationContext.raise_if_cancelled() for tasks that opt in."""
