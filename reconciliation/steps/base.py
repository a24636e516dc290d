"""
Abstract Base Class for Reconciliation Steps

A step is a unit of a reconciliation run that is timed and logged as a whole.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from reconciliation.exceptions import ReconciliationError


class BaseStep(ABC):
    """Abstract base class for reconciliation steps."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the step.

        Args:
            config: Step options, read with get_config_value()
        """
        self.config = dict(config or {})
        self.logger = logging.getLogger(self.__class__.__name__)
        self.last_duration: Optional[float] = None

    @abstractmethod
    def process(self, input_data: Any) -> Any:
        """Do the work of the step."""
        pass

    def describe(self) -> str:
        """Label used in the start and finish log lines."""
        return self.__class__.__name__

    def execute(self, input_data: Any) -> Any:
        """
        Run process() and log how long it took.

        A ReconciliationError is logged with the elapsed time and re-raised
        unchanged, so callers see the chunk index and raw response.
        """
        label = self.describe()
        self.logger.info(f"{label} started")
        started = time.perf_counter()

        try:
            result = self.process(input_data)
        except ReconciliationError as e:
            self.last_duration = time.perf_counter() - started
            self.logger.error(f"{label} aborted after {self.last_duration:.2f}s: {e}")
            raise

        self.last_duration = time.perf_counter() - started
        self.logger.info(f"{label} finished in {self.last_duration:.2f}s")

        if self.logger.isEnabledFor(logging.DEBUG):
            self._log_step_result(result)
        return result

    def _log_step_result(self, result: Any):
        """Debug summary of the result; steps override this."""
        self.logger.debug(f"{self.describe()} returned {type(result).__name__}")

    def get_config_value(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)
