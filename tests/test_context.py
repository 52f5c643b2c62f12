# tests/test_context.py

from __future__ import annotations

import threading

import pytest

from shop_backend.workerpool import CancellationContext, TaskCancelledError


def test_cancel_fires_once() -> None:
    ctx = CancellationContext.background()
    assert not ctx.cancelled

    assert ctx.cancel() is True
    assert ctx.cancel() is False
    assert ctx.cancelled


def test_parent_cancel_reaches_children_but_not_the_reverse() -> None:
    root = CancellationContext.background()
    child = CancellationContext.with_cancel(root)
    grandchild = CancellationContext.with_cancel(child)
    sibling = CancellationContext.with_cancel(root)

    child.cancel()
    assert grandchild.cancelled
    assert not root.cancelled
    assert not sibling.cancelled

    root.cancel()
    assert sibling.cancelled


def test_child_of_cancelled_parent_is_born_cancelled() -> None:
    root = CancellationContext.background()
    root.cancel()

    assert CancellationContext.with_cancel(root).cancelled


def test_wait_times_out_and_wakes_on_cancel() -> None:
    ctx = CancellationContext.background()
    assert ctx.wait(0.01) is False

    threading.Timer(0.02, ctx.cancel).start()
    assert ctx.wait(2.0) is True


def test_raise_if_cancelled() -> None:
    ctx = CancellationContext.background()
    ctx.raise_if_cancelled()

    ctx.cancel()
    with pytest.raises(TaskCancelledError):
        ctx.raise_if_cancelled()
