# src/shop_backend/workerpool/pool.py

from __future__ import annotations

"""
Bounded worker pool.

A fixed set of worker threads consumes one bounded FIFO queue:
- submit() enqueues a task, blocking while the queue is full,
- every task is called as task(ctx) with the pool's cancellation context,
- stop() fires the context, closes the queue and waits for all workers.

Shutdown is cooperative: a running task is never interrupted, it can only
notice ctx.cancelled. Tasks already accepted are drained by default, so
work submitted before stop() is not lost.

Hazard (caller responsibility): a task must not rely on submitting more
work to the same pool while it is stopping. Such a submit fails with
PoolStoppedError instead of waiting for capacity.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from .context import CancellationContext
from .errors import PoolStoppedError

Task = Callable[[CancellationContext], None]

T = TypeVar("T")


class PoolState(StrEnum):
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(slots=True, frozen=True)
class PoolStats:
    """Point-in-time snapshot of a pool (counters are not atomic as a set)."""

    name: str
    size: int
    capacity: int
    state: PoolState
    queued: int
    active: int
    completed: int
    failed: int
    discarded: int


class _BoundedQueue(Generic[T]):
    """
    FIFO queue with a fixed capacity and a "closed" state.

    - put() blocks while full; returns False once the queue is closed.
    - get() blocks while empty; returns None once closed AND empty,
      so buffered items are still handed out after close().
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._closed = False

        mutex = threading.Lock()
        self._not_empty = threading.Condition(mutex)
        self._not_full = threading.Condition(mutex)

    @property
    def capacity(self) -> int:
        return self._capacity

    def put(self, item: T) -> bool:
        with self._not_full:
            while not self._closed and len(self._items) >= self._capacity:
                self._not_full.wait()
            if self._closed:
                return False
            self._items.append(item)
            self._not_empty.notify()
            return True

    def get(self) -> T | None:
        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if not self._items:
                return None
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def close(self) -> None:
        with self._not_empty:
            self._closed = True
            # Wake everybody: getters re-check for leftovers, putters give up.
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def clear(self) -> list[T]:
        with self._not_empty:
            items = list(self._items)
            self._items.clear()
            self._not_full.notify_all()
            return items

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._items)


class WorkerPool:
    """
    Fixed-size thread pool with a bounded queue and cooperative shutdown.

    Lifecycle: OPEN -> CLOSING (stop() called) -> CLOSED (last worker exited).

    Usage:
        pool = WorkerPool(5, name="orders")
        pool.submit(lambda ctx: send_receipt(order_id))
        ...
        pool.stop()  # once, during process shutdown
    """

    def __init__(
            self,
            size: int,
            *,
            name: str = "default",
            logger: logging.Logger | None = None,
    ) -> None:
        size = int(size)
        if size <= 0:
            size = 1

        self._size = size
        self._name = name
        self._log = logger if logger is not None else logging.getLogger(__name__)

        # Small buffer so short bursts don't block callers.
        self._queue: _BoundedQueue[Task] = _BoundedQueue(size * 2)
        self._ctx = CancellationContext.with_cancel(CancellationContext.background())

        self._state = PoolState.OPEN
        self._state_lock = threading.Lock()
        self._stop_lock = threading.Lock()

        self._stats_lock = threading.Lock()
        self._active = 0
        self._completed = 0
        self._failed = 0
        self._discarded = 0

        self._workers: list[threading.Thread] = []
        for i in range(size):
            t = threading.Thread(
                target=self._worker_loop,
                name=f"workerpool-{name}-{i}",
                daemon=True,
            )
            self._workers.append(t)
            t.start()

        self._log.info("Worker pool %r started: workers=%d capacity=%d", name, size, self._queue.capacity)

    # ---- properties ----

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._queue.capacity

    @property
    def state(self) -> PoolState:
        with self._state_lock:
            return self._state

    @property
    def context(self) -> CancellationContext:
        return self._ctx

    def stats(self) -> PoolStats:
        with self._stats_lock:
            active, completed, failed, discarded = (
                self._active,
                self._completed,
                self._failed,
                self._discarded,
            )
        return PoolStats(
            name=self._name,
            size=self._size,
            capacity=self._queue.capacity,
            state=self.state,
            queued=len(self._queue),
            active=active,
            completed=completed,
            failed=failed,
            discarded=discarded,
        )

    # ---- public API ----

    def submit(self, task: Task | None) -> None:
        """
        Enqueue a task.

        - None is accepted and ignored.
        - Blocks while the queue is full.
        - Raises PoolStoppedError if stop() has begun, either before the call
          or while the caller was waiting for space.
        """
        if task is None:
            return

        # Fast path: don't block on a full queue of a pool that is going away.
        if self._ctx.cancelled:
            raise PoolStoppedError()

        if not self._queue.put(task):
            raise PoolStoppedError()

    def stop(self, *, drain: bool = True) -> None:
        """
        Stop accepting work and wait until every worker has exited.

        drain=True: tasks accepted before stop() still run.
        drain=False: tasks not yet picked up by a worker are discarded.

        Safe to call more than once; later calls just wait for quiescence.
        Must not be called from a task running on this pool.
        """
        current = threading.current_thread()
        if current in self._workers:
            raise RuntimeError("WorkerPool.stop() called from one of its own workers")

        with self._stop_lock:
            with self._state_lock:
                first_call = self._state == PoolState.OPEN
                if first_call:
                    self._state = PoolState.CLOSING

            if first_call:
                self._log.info("Worker pool %r stopping (drain=%s)...", self._name, drain)
                self._ctx.cancel()
                self._queue.close()

                if not drain:
                    dropped = self._queue.clear()
                    if dropped:
                        with self._stats_lock:
                            self._discarded += len(dropped)
                        self._log.warning(
                            "Worker pool %r discarded %d queued task(s)", self._name, len(dropped)
                        )

            for t in self._workers:
                t.join()

            with self._state_lock:
                if self._state != PoolState.CLOSED:
                    self._state = PoolState.CLOSED
                    self._log.info("Worker pool %r stopped.", self._name)

    # ---- internals ----

    def _worker_loop(self) -> None:
        self._log.debug("Worker %s started.", threading.current_thread().name)
        while True:
            task = self._queue.get()
            if task is None:
                break
            self._run_task(task)
        self._log.debug("Worker %s exited.", threading.current_thread().name)

    def _run_task(self, task: Task) -> None:
        with self._stats_lock:
            self._active += 1
        failed = False
        try:
            task(self._ctx)
        except BaseException:
            # SystemExit included: a task must not shrink the pool below its size.
            failed = True
            self._log.exception("Task failed in worker pool %r", self._name)
        finally:
            with self._stats_lock:
                self._active -= 1
                self._completed += 1
                if failed:
                    self._failed += 1

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"WorkerPool(name={self._name!r}, size={self._size}, state={self.state.value})"
