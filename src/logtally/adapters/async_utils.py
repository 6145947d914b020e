"""Async-to-sync bridge for non-async callers such as the CLI."""

import asyncio
from collections.abc import AsyncIterable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def _run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion in a new event loop.

    Exceptions raised by the coroutine propagate unchanged.
    """
    return asyncio.run(coro)


async def _collect(iterable: AsyncIterable[T]) -> list[T]:
    return [item async for item in iterable]


def _collect_async_iterable(iterable: AsyncIterable[T]) -> list[T]:
    """Gather every item of an async iterable into a list, synchronously."""
    return _run_sync(_collect(iterable))
