"""
Base operation strategy interface.

An operation supplies everything that differs between consolidation,
categorization and fuzzy matching: the role instruction, the section messages,
the key holding the reply array, the output column names, the chunk budget and
how the derived value of each reply row is finalised. Chunking, context
assembly, parsing and orchestration are shared.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


class BaseOperation(ABC):
    """Abstract base class for all reconciliation operations."""

    name = "operation"
    result_key = "entities"
    columns: Tuple[str, str] = ("entity", "derived")
    default_budget = 5000

    # Whether earlier results and later chunks are shown with each chunk.
    carries_context = True

    # Whether an original resolved twice to different values is worth a warning.
    monitors_consistency = False

    single_chunk_message = ""
    resolved_message = ""
    lookahead_message = ""
    current_message = ""
    examples_message = ""
    reference_message = ""
    reminder = ""

    def __init__(self, budget: Optional[int] = None, **kwargs):
        """
        Initialize the operation.

        Args:
            budget: Character budget per chunk (operation default if omitted)
            **kwargs: Additional operation-specific configuration
        """
        self.budget = budget or self.default_budget
        self.config = kwargs

    @abstractmethod
    def system_prompt(self) -> str:
        """Role instruction sent as the system message with every chunk."""
        pass

    def examples(self) -> List[Tuple[str, str]]:
        """Few-shot (entity, derived) pairs shown with the first chunk."""
        return []

    def reference_items(self) -> List[str]:
        """Reference list sent whole with every chunk."""
        return []

    def finalize_derived(self, original: str, derived: Optional[str]) -> Optional[str]:
        """Map the derived value of one reply row onto its final form."""
        return derived

    def get_config_value(self, key: str, default=None):
        """Get a configuration value with optional default."""
        return self.config.get(key, default)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(budget={self.budget})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(budget={self.budget}, config={self.config})"
