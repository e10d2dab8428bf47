"""Offload blocking storage calls so handlers and the sweeper keep the loop free."""

import asyncio
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_sync(func: Callable[..., T], *args: Any, timeout: float = 30) -> T:
    """Await ``func(*args)`` on a worker thread; TimeoutError after *timeout* seconds."""
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)
    except asyncio.TimeoutError:
        name = getattr(func, "__qualname__", repr(func))
        raise TimeoutError(f"{name} did not finish within {timeout}s") from None
