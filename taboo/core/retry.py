"""
Retry Utilities for Resilient Operations.

Retry logic with exponential backoff and jitter for the one external call
the game makes: asking the language model for a deck.

    ┌─────────────────┐
    │  ClaudeClient   │──→  @llm_retry
    └─────────────────┘     (exponential backoff + jitter)

Backoff Strategy
----------------
Delay increases exponentially: `base_delay * (exponential_base ^ attempt)`

    Attempt 1: 1.0s  (+ jitter)
    Attempt 2: 2.0s  (+ jitter)
    ... capped at max_delay

Jitter adds a random 0-25% on top of each delay.
"""

import random
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type

from taboo.core.exceptions import RateLimitError, RetryError
from taboo.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0  # seconds
    max_delay: float = 60.0  # seconds
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,)


def calculate_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float,
    jitter: bool,
) -> float:
    """Calculate delay for next retry attempt."""
    delay = base_delay * (exponential_base**attempt)
    delay = min(delay, max_delay)

    if jitter:
        delay += delay * 0.25 * random.random()

    return delay


def _handle_retry_attempt(
    exception: Exception,
    attempt: int,
    config: RetryConfig,
    func_name: str,
    on_retry: Optional[Callable[[Exception, int], None]],
) -> None:
    """
    Log, notify and sleep before the next attempt.

    Rule #1: Extracted helper reduces nesting

    Args:
        exception: Exception that triggered retry
        attempt: Current attempt number (0-based)
        config: Retry settings
        func_name: Name of function being retried
        on_retry: Optional callback to invoke
    """
    if attempt >= config.max_attempts - 1:
        logger.error(
            f"All {config.max_attempts} attempts failed",
            error=str(exception),
            function=func_name,
        )
        return

    delay = calculate_delay(
        attempt,
        config.base_delay,
        config.max_delay,
        config.exponential_base,
        config.jitter,
    )
    retry_after = getattr(exception, "retry_after", None)
    if retry_after:
        delay = max(delay, min(float(retry_after), config.max_delay))

    logger.warning(
        f"Attempt {attempt + 1}/{config.max_attempts} failed, "
        f"retrying in {delay:.2f}s",
        error=str(exception),
        function=func_name,
    )

    if on_retry:
        on_retry(exception, attempt + 1)

    time.sleep(delay)


def retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    on_retry: Optional[Callable[[Exception, int], None]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator for retrying functions with exponential backoff.

    Exceptions outside retryable_exceptions propagate immediately.

    Args:
        max_attempts: Maximum number of attempts (including first try)
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries
        exponential_base: Base for exponential backoff
        jitter: Add random jitter to delays
        retryable_exceptions: Exception types to retry on
        on_retry: Callback(exception, attempt) called before each retry

    Raises:
        RetryError: If all attempts fail

    Example:
        @retry(retryable_exceptions=(ConnectionError, TimeoutError))
        def fetch_data() -> None:
            ...
    """
    config = RetryConfig(
        max_attempts=max_attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        retryable_exceptions=retryable_exceptions or (Exception,),
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            last_exception: Optional[Exception] = None

            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except config.retryable_exceptions as e:
                    last_exception = e
                    _handle_retry_attempt(e, attempt, config, func.__name__, on_retry)

            raise RetryError(
                f"Failed after {config.max_attempts} attempts: {last_exception}",
                last_exception=last_exception,
                attempts=config.max_attempts,
            )

        return wrapper

    return decorator


# For LLM API calls (rate limits, overload, dropped connections)
# Delays: 1s, 2s with exponential backoff (base 2.0)
llm_retry = retry(
    max_attempts=3,
    base_delay=1.0,
    max_delay=30.0,
    exponential_base=2.0,
    jitter=True,
    retryable_exceptions=(RateLimitError, ConnectionError, TimeoutError),
)
