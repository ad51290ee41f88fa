"""
Database utilities and contention handling.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from core.domain.exceptions import StoreContentionError
from core.metrics import store_contention_total

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_on_contention(
    operation: Callable[[], Awaitable[T]],
    max_retries: int,
    backoff: float,
    label: str = "update",
) -> T:
    """
    Run an operation, retrying it while it fails with StoreContentionError.

    The operation is attempted at most max_retries + 1 times, sleeping
    backoff * 2 ** attempt seconds between attempts.

    Args:
        operation: Zero-argument coroutine function to run
        max_retries: Number of extra attempts after the first one
        backoff: Base delay in seconds
        label: Operation name for logs and metrics

    Returns:
        The operation's result

    Raises:
        StoreContentionError: If every attempt hit contention
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except StoreContentionError:
            store_contention_total.labels(operation=label).inc()
            if attempt >= max_retries:
                logger.warning("Giving up %s after %d attempt(s)", label, attempt + 1)
                raise
            delay = backoff * 2**attempt
            logger.info(
                "Contention on %s, retrying in %.3fs (attempt %d/%d)",
                label,
                delay,
                attempt + 1,
                max_retries,
            )
            attempt += 1
            await asyncio.sleep(delay)
