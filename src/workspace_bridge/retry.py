"""Retry with linear backoff for Google API calls.

Cold starts and quota limits on the Google side are short-lived, so a
failed request with a transient status is retried a fixed number of times,
waiting ``attempt * backoff_seconds`` between attempts (2s then 4s with the
defaults). Everything else propagates on the first failure.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from workspace_bridge.errors import UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_STATUS_CODES = frozenset({408, 429, 503})


@dataclass(frozen=True)
class RetryPolicy:
    """Policy for retrying a single upstream operation.

    Attributes:
        max_attempts: Total attempts, including the first one.
        backoff_seconds: Delay multiplier for linear backoff.
        retryable_status_codes: HTTP statuses treated as transient.
    """

    max_attempts: int = 3
    backoff_seconds: float = 2.0
    retryable_status_codes: frozenset[int] = TRANSIENT_STATUS_CODES

    def backoff(self, attempt: int) -> float:
        """Return the delay in seconds after failed attempt number ``attempt``."""
        return attempt * self.backoff_seconds

    def is_retryable(self, error: Exception) -> bool:
        """Check if an error should trigger another attempt."""
        return (
            isinstance(error, UpstreamError)
            and error.status_code in self.retryable_status_codes
        )


DEFAULT_RETRY_POLICY = RetryPolicy()


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Execute operation, retrying transient failures.

    Args:
        operation: Zero-arg callable returning an awaitable.
        policy: Retry policy. Uses DEFAULT_RETRY_POLICY if None.
        sleep: Coroutine used to wait between attempts.

    Returns:
        The result of the first successful attempt.

    Raises:
        The original exception, unchanged, when it is not retryable or
        when the last allowed attempt fails.
    """
    policy = policy or DEFAULT_RETRY_POLICY

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if attempt >= policy.max_attempts or not policy.is_retryable(e):
                raise
            delay = policy.backoff(attempt)
            logger.warning(
                "Transient upstream failure (%s), retrying in %.1fs (attempt %d/%d)",
                e,
                delay,
                attempt + 1,
                policy.max_attempts,
            )
            await sleep(delay)
            attempt += 1
