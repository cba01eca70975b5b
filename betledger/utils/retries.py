"""
Retry and pacing utilities for remote collaborators.

Uses tenacity for retry logic. The AI fallback gets exactly one retry
after a fixed backoff when it reports rate limiting; the recognition
service gets a short exponential retry on transport errors.
"""

import asyncio
from functools import wraps
from typing import Any, Awaitable, Callable, Iterable, Optional, Type

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from config.logging_config import get_logger

logger = get_logger(__name__)


# Common exceptions to retry
RETRIABLE_EXCEPTIONS: tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)


def _log_retry(retry_state) -> None:
    """Log before tenacity sleeps between attempts."""
    outcome = retry_state.outcome
    logger.warning(
        "Retrying after error",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else 0,
        error=str(outcome.exception()) if outcome else None,
    )


def with_async_retry(
    max_attempts: int = 3,
    wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    exceptions: tuple[Type[Exception], ...] = RETRIABLE_EXCEPTIONS,
):
    """
    Decorator for async functions that should be retried on failure.

    Uses exponential backoff between attempts.

    Args:
        max_attempts: Maximum number of attempts
        wait_seconds: Initial wait time between retries
        max_wait_seconds: Maximum wait time between retries
        exceptions: Tuple of exception types to retry on

    Usage:
        @with_async_retry(max_attempts=2)
        async def recognize(image):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=wait_seconds, max=max_wait_seconds),
                retry=retry_if_exception_type(exceptions),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    return await func(*args, **kwargs)
        return wrapper
    return decorator


async def retry_async(
    func: Callable[..., Awaitable[Any]],
    *args,
    max_attempts: int = 2,
    wait_seconds: float = 3.0,
    exceptions: tuple[Type[Exception], ...] = RETRIABLE_EXCEPTIONS,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    **kwargs,
) -> Any:
    """
    Retry an async function call with a fixed wait between attempts.

    Args:
        func: Async function to call
        *args: Positional arguments for func
        max_attempts: Maximum attempts, including the first call
        wait_seconds: Fixed wait before each retry
        exceptions: Exceptions to retry on; anything else propagates at once
        sleep: Awaitable sleep used between attempts (asyncio.sleep by default)
        **kwargs: Keyword arguments for func

    Returns:
        Result of func

    Raises:
        The last exception raised by func
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(wait_seconds),
        retry=retry_if_exception_type(exceptions),
        before_sleep=_log_retry,
        reraise=True,
        sleep=sleep or asyncio.sleep,
    ):
        with attempt:
            return await func(*args, **kwargs)


class PacedSequence:
    """
    Runs async steps one after another with a fixed delay between them.

    This is client-side rate limiting for services that allow only a
    few calls per minute. No delay is added before the first step or
    after the last one.
    """

    def __init__(
        self,
        delay: float,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize the sequence.

        Args:
            delay: Seconds to wait between successive steps
            sleep: Awaitable sleep function (asyncio.sleep by default)
        """
        self.delay = delay
        self._sleep = sleep or asyncio.sleep

    async def run(
        self,
        step: Callable[[int, Any], Awaitable[Any]],
        items: Iterable[Any],
    ) -> list[Any]:
        """
        Await step(index, item) for each item in order.

        Returns:
            Step results in input order
        """
        results = []
        for index, item in enumerate(items):
            if index > 0 and self.delay > 0:
                logger.debug("Pacing before next step", index=index, delay=self.delay)
                await self._sleep(self.delay)
            results.append(await step(index, item))
        return results
