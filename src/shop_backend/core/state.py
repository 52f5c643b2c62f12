# src/shop_backend/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings
from ..workerpool import PoolStoppedError, Task, WorkerPool

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Settings live on the state so handlers don't read global config.
    settings: Settings
    worker_pool: WorkerPool

    def submit_background(self, task: Task, *, description: str) -> bool:
        """
        Queue post-processing work without failing the caller.

        A stopped pool is an expected condition during shutdown: the task is
        skipped with a warning and the request that triggered it still succeeds.
        Returns True if the task was accepted.
        """
        try:
            self.worker_pool.submit(task)
        except PoolStoppedError:
            logger.warning("Worker pool is stopped; skipping background task: %s", description)
            return False

        logger.debug("Background task queued: %s", description)
        return True
