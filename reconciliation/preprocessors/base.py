"""
Base Preprocessor Classes

Preprocessors rewrite single entity strings before they are submitted. A
subclass implements transform(); the base class validates the input, reports
empty results and wraps everything in a PreprocessorResult.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class PreprocessorResult:
    """Outcome of preprocessing one entity."""

    original: Any
    value: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.value is None and self.error is None:
            raise ValueError("Result needs either a value or an error")

    @property
    def success(self) -> bool:
        return self.error is None


class BasePreprocessor(ABC):
    """Abstract base class for entity preprocessors."""

    name = "preprocessor"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the preprocessor.

        Args:
            config: Preprocessor options, read with get_config_value()
        """
        self.config = dict(config or {})
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def transform(self, text: str) -> str:
        """Rewrite one entity string."""
        pass

    def process(self, text: Any) -> PreprocessorResult:
        """
        Transform one entity, reporting rather than raising on bad input.

        Args:
            text: Entity to transform

        Returns:
            PreprocessorResult with the transformed value, or an error when the
            input is not a string or nothing is left after the transformation
        """
        if not isinstance(text, str):
            self.logger.error(f"{self.name} expects a string, got {type(text).__name__}")
            return PreprocessorResult(text, error=f"Expected a string, got {type(text).__name__}")

        value = self.transform(text)
        if not value:
            return PreprocessorResult(text, error=f"{self.name} left an empty string")

        return PreprocessorResult(
            text,
            value=value,
            metadata={"original_length": len(text), "length": len(value)},
        )

    def transform_all(self, texts: Iterable[str]) -> List[str]:
        """Transform every entity, keeping order and length."""
        return [self.transform(text) for text in texts]

    def get_config_value(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)
