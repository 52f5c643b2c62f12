"""
Worker pool subsystem.

Components:
- context.py: CancellationContext (one-shot, broadcast, cooperative cancellation)
- pool.py: WorkerPool (fixed worker threads over a bounded FIFO queue)
- errors.py: PoolStoppedError and friends
"""

from .context import CancellationContext
from .errors import PoolStoppedError, TaskCancelledError, WorkerPoolError
from .pool import PoolState, PoolStats, Task, WorkerPool

__all__ = [
    "CancellationContext",
    "PoolState",
    "PoolStats",
    "PoolStoppedError",
    "Task",
    "TaskCancelledError",
    "WorkerPool",
    "WorkerPoolError",
]
