"""
Retry utilities for external service calls.
Implements exponential backoff for transient failures.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


async def retry_async(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,)
) -> T:
    """
    Retry an async function, doubling the delay after each failure.

    Args:
        func: Zero-argument coroutine function to retry
        max_attempts: Maximum number of attempts
        initial_delay: Delay before the second attempt, in seconds
        exceptions: Tuple of exceptions to catch and retry

    Returns:
        Result of the function call

    Raises:
        Last exception if all retries fail
    """
    name = getattr(func, "__name__", repr(func))

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except exceptions as e:
            if attempt >= max_attempts:
                logger.error(f"Function {name} failed after {max_attempts} attempts: {e}")
                raise

            delay = initial_delay * (2 ** (attempt - 1))

            logger.warning(
                f"Attempt {attempt}/{max_attempts} failed for {name}: {e}. "
                f"Retrying in {delay:.2f}s..."
            )

            await asyncio.sleep(delay)

    raise ValueError("max_attempts must be at least 1")
