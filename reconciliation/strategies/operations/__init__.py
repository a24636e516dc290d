"""
Operation Strategies

Each operation describes one way of reconciling an entity list: the prompts it
sends, the reply key it expects and how it finalises derived values.
"""

from .base import BaseOperation
from .categorization import UNCERTAIN, CategorizationOperation
from .consolidation import ConsolidationOperation
from .fuzzy_matching import NO_MATCH, FuzzyMatchingOperation

__all__ = [
    "BaseOperation",
    "CategorizationOperation",
    "ConsolidationOperation",
    "FuzzyMatchingOperation",
    "NO_MATCH",
    "UNCERTAIN",
]
