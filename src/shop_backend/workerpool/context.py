# src/shop_backend/workerpool/context.py

from __future__ import annotations

"""
Cancellation context passed to every pool task.

A context is a one-shot, broadcast "stop now" flag:
- once cancelled it stays cancelled,
- every waiter (current and future) observes it,
- cancelling a parent cancels all of its children, never the other way round.

Cancellation is cooperative. Long tasks are expected to poll `cancelled`
(or call `raise_if_cancelled()`) between steps; nothing is interrupted.
"""

import threading

from .errors import TaskCancelledError


class CancellationContext:
    def __init__(self, parent: CancellationContext | None = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children: list[CancellationContext] = []
        self._parent = parent

        if parent is not None:
            parent._attach(self)

    @classmethod
    def background(cls) -> CancellationContext:
        """Root context. Only an explicit cancel() fires it."""
        return cls()

    @classmethod
    def with_cancel(cls, parent: CancellationContext) -> CancellationContext:
        """Child context derived from parent."""
        return cls(parent)

    @property
    def parent(self) -> CancellationContext | None:
        return self._parent

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def _attach(self, child: CancellationContext) -> None:
        with self._lock:
            if not self._event.is_set():
                self._children.append(child)
                return
        # Parent already fired: the child is born cancelled.
        child.cancel()

    def cancel(self) -> bool:
        """
        Fire the signal.

        Returns True only for the call that actually cancelled the context;
        repeated calls are no-ops and return False.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            children, self._children = self._children, []

        for child in children:
            child.cancel()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or timeout expires. Returns `cancelled`."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TaskCancelledError("context cancelled")

    def __repr__(self) -> str:
        return f"CancellationContext(cancelled={self.cancelled})"
