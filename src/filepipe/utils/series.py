"""Run an async worker over a sequence, one item at a time."""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Iterable, TypeVar, Union

T = TypeVar("T")

Worker = Callable[[T, int], Union[Awaitable[Any], Any]]

__all__ = ["series"]


async def series(items: Iterable[T], worker: Worker) -> None:
    """Call ``worker(item, index)`` for each item in order.

    The next item is only started once the previous call (and the awaitable it
    returned, if any) has completed. An exception from the worker stops the
    iteration and propagates to the caller.
    """

    for index, item in enumerate(items):
        outcome = worker(item, index)
        if inspect.isawaitable(outcome):
            await outcome
