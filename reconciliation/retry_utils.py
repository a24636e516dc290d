"""
Retry utilities for completion requests.

A chunk that fails with a retryable error is re-sent with the identical
prompt after an exponential backoff. The default configuration makes a single
attempt, so the first failure aborts the run.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Type, TypeVar

from .exceptions import ReconciliationError, TransportError

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 1
    initial_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 60.0
    jitter: bool = True
    retryable: Tuple[Type[ReconciliationError], ...] = field(
        default_factory=lambda: (TransportError,)
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Retry delays must not be negative")

    @classmethod
    def with_retries(cls, retries: int, **kwargs) -> "RetryConfig":
        """Configuration allowing `retries` extra attempts per chunk."""
        return cls(max_attempts=retries + 1, **kwargs)


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay after the given (1-based) failed attempt."""
    delay = config.initial_delay * (config.backoff_factor ** (attempt - 1))
    delay = min(delay, config.max_delay)

    if config.jitter:
        # Add up to 25% jitter
        delay += delay * 0.25 * random.random()

    return delay


def call_with_retry(
    func: Callable[[], T],
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
    description: str = "Operation",
) -> T:
    """
    Call `func` until it succeeds, raises a non-retryable error or runs out of attempts.

    Args:
        func: Zero-argument callable to invoke
        config: Retry configuration (single attempt if omitted)
        sleep: Function used to wait between attempts
        description: Label used in log messages

    Returns:
        The value returned by `func`
    """
    config = config or RetryConfig()

    for attempt in range(1, config.max_attempts + 1):
        try:
            return func()
        except config.retryable as e:
            if attempt == config.max_attempts:
                if config.max_attempts > 1:
                    logger.error(
                        f"{description} failed after {config.max_attempts} attempts: {e}"
                    )
                raise

            delay = calculate_delay(attempt, config)
            logger.warning(
                f"{description} attempt {attempt} failed: {e}. "
                f"Retrying in {delay:.2f}s..."
            )
            sleep(delay)

    # max_attempts >= 1, so the loop always returns or raises
    raise AssertionError("unreachable")
