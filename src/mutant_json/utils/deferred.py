"""Sync/async duality helpers.

Engine logic is written once, as a generator that ``yield``s every awaitable
it needs resolved and receives the resolved value back::

    def steps():
        value = yield some_awaitable
        return value * 2

``drive(steps())`` runs such a generator synchronously.  As long as nothing
is yielded the caller gets a plain value; the first yielded awaitable hands
the rest of the run to a coroutine, which the caller awaits.
"""

from __future__ import annotations

import inspect
from contextlib import closing
from typing import Any, Awaitable, Generator

Steps = Generator[Awaitable[Any], Any, Any]


def is_deferred(value: Any) -> bool:
    """``True`` for coroutines, futures, tasks and any other awaitable."""
    return inspect.isawaitable(value)


async def settled(value: Any) -> Any:
    """Wrap an already available *value* in a coroutine."""
    return value


async def _drive_async(steps: Steps, pending: Awaitable[Any]) -> Any:
    with closing(steps):
        while True:
            resolved = await pending
            try:
                pending = steps.send(resolved)
            except StopIteration as stop:
                return stop.value


def drive(steps: Steps, *, force_async: bool = False) -> Any:
    """Run *steps* until it returns or yields its first awaitable.

    Errors raised before the first awaitable propagate from this call;
    errors raised after it propagate when the returned coroutine is awaited.
    """
    try:
        pending = next(steps)
    except StopIteration as stop:
        return settled(stop.value) if force_async else stop.value
    return _drive_async(steps, pending)
