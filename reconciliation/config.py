"""
Run configuration.

Settings come from command line arguments first, then environment variables
(a .env file is loaded by the command line entry point), then defaults.

Environment Variables:
- RECONCILIATION_MODEL: Model name, optionally provider-prefixed (default gpt-4o)
- RECONCILIATION_SEED: Integer seed passed to the service
- RECONCILIATION_TIMEOUT: Request timeout in seconds
- RECONCILIATION_RETRIES: Extra attempts per chunk on transport errors (default 0)
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .retry_utils import RetryConfig

DEFAULT_MODEL = "gpt-4o"


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class ReconciliationConfig:
    """Configuration for one reconciliation run."""

    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    seed: Optional[int] = None
    timeout: Optional[float] = None
    retries: int = 0
    retry_initial_delay: float = 1.0
    budget: Optional[int] = None
    strict_coverage: bool = True
    verbose: bool = False
    retry: RetryConfig = field(init=False)

    def __post_init__(self):
        if self.retries < 0:
            raise ValueError(f"retries must not be negative, got {self.retries}")
        self.retry = RetryConfig.with_retries(
            self.retries, initial_delay=self.retry_initial_delay
        )

    @classmethod
    def from_env(cls, **overrides) -> "ReconciliationConfig":
        """
        Build a configuration from environment variables.

        Keyword arguments that are not None override the environment.
        """
        values = {
            "model": os.getenv("RECONCILIATION_MODEL", DEFAULT_MODEL),
            "seed": _env_int("RECONCILIATION_SEED"),
            "timeout": _env_float("RECONCILIATION_TIMEOUT"),
            "retries": _env_int("RECONCILIATION_RETRIES") or 0,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
