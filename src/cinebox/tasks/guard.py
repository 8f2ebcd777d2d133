"""Guard that keeps a job from overlapping with itself."""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def skip_if_running(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T | None]]:
    """
    Skip a call while a previous call of the same job is still in progress.

    The scheduler already enforces this for scheduled ticks (max_instances=1);
    this also covers runs triggered manually from the admin API.
    """
    lock = asyncio.Lock()

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T | None:
        if lock.locked():
            logger.warning(f"{func.__name__} is still running, skipping this run")
            return None
        async with lock:
            return await func(*args, **kwargs)

    return wrapper
