"""
Retry wrapper for remote calls.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from .config import get_logger
from .core.utils import calculate_retry_delay

T = TypeVar("T")

logger = get_logger("retry")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 2.0,
    label: str = "operation",
) -> T:
    """
    Run ``operation`` up to ``max_attempts`` times with exponential backoff.

    After failed attempt ``n`` (not the last) waits ``base_delay * 1.5 ** (n - 1)``
    seconds. When every attempt fails the last exception is re-raised as is.

    Args:
        operation: Zero-argument callable returning an awaitable
        max_attempts: Total attempts, including the first
        base_delay: Delay in seconds after the first failure
        label: Operation name used in log messages

    Returns:
        The value of the first successful attempt

    Example:
        >>> sheets = await with_retry(
        ...     lambda: client.get_sheets(document_id),
        ...     max_attempts=3,
        ...     base_delay=2.0,
        ...     label="get sheets",
        ... )
    """
    attempts = max(1, int(max_attempts))

    for attempt in range(1, attempts + 1):
        if attempt > 1:
            logger.info("Retry attempt %d/%d for %s...", attempt, attempts, label)
        try:
            return await operation()
        except Exception as e:
            logger.warning("Attempt %d/%d for %s failed: %s", attempt, attempts, label, e)

            if attempt >= attempts:
                raise

            delay = calculate_retry_delay(attempt, base_delay)
            logger.info("Waiting %.1f seconds before next retry...", delay)
            await asyncio.sleep(delay)
