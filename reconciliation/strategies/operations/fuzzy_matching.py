"""
Fuzzy matching operation.

Matches every entity of a primary list against a reference list. The primary
list is chunked; the reference list is sent whole with every chunk. Entities
without a match carry the NO_MATCH sentinel instead of an empty string.
"""

import logging
from typing import List, Optional, Sequence

from reconciliation.prompts import fuzzy_matching as prompts

from .base import BaseOperation

logger = logging.getLogger(__name__)

NO_MATCH = None


class FuzzyMatchingOperation(BaseOperation):
    """Fuzzy cross-list matching."""

    name = "fuzzy_matching"
    result_key = "matches"
    columns = ("entity", "match")
    default_budget = 7100

    # Matching one entity does not depend on how other entities were matched.
    carries_context = False

    single_chunk_message = prompts.SINGLE_CHUNK_MESSAGE
    current_message = prompts.CURRENT_MESSAGE
    reference_message = prompts.REFERENCE_MESSAGE
    reminder = prompts.REMINDER

    def __init__(
        self, reference: Sequence[str], budget: Optional[int] = None, **kwargs
    ):
        super().__init__(budget, **kwargs)
        self.reference = list(reference)
        self._reference_set = set(self.reference)
        if not self.reference:
            raise ValueError("The reference list must not be empty")

    def system_prompt(self) -> str:
        return prompts.FUZZY_MATCHING_ROLE

    def reference_items(self) -> List[str]:
        return list(self.reference)

    def finalize_derived(self, original, derived):
        if derived is None or not derived.strip():
            return NO_MATCH
        if derived not in self._reference_set:
            logger.warning(
                f"Match {derived!r} for {original!r} is not in the reference list"
            )
        return derived
