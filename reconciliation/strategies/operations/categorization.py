"""
Categorization operation.

Assigns every entity a label from a vocabulary the caller describes in natural
language, optionally illustrated with example pairs. Entities the model cannot
label carry the "uncertain" sentinel.
"""

from typing import List, Optional, Sequence, Tuple

from reconciliation.prompts import categorization as prompts

from .base import BaseOperation

UNCERTAIN = "uncertain"


class CategorizationOperation(BaseOperation):
    """Category-label assignment."""

    name = "categorization"
    result_key = "entities"
    columns = ("entity", "label")
    default_budget = 6100

    single_chunk_message = prompts.SINGLE_CHUNK_MESSAGE
    resolved_message = prompts.RESOLVED_MESSAGE
    lookahead_message = prompts.LOOKAHEAD_MESSAGE
    current_message = prompts.CURRENT_MESSAGE
    examples_message = prompts.EXAMPLES_MESSAGE
    reminder = prompts.REMINDER

    def __init__(
        self,
        description: str,
        examples: Optional[Sequence[Tuple[str, str]]] = None,
        budget: Optional[int] = None,
        **kwargs,
    ):
        """
        Initialize the categorization operation.

        Args:
            description: Natural-language description of the labels to apply
            examples: Optional (entity, label) pairs to learn from
            budget: Character budget per chunk
        """
        super().__init__(budget, **kwargs)
        if not description or not description.strip():
            raise ValueError("A description of the categories is required")
        self.description = description.strip()
        self._examples = [tuple(pair) for pair in (examples or [])]
        for pair in self._examples:
            if len(pair) != 2:
                raise ValueError(f"Examples must be (entity, label) pairs, got {pair!r}")

    def system_prompt(self) -> str:
        return f"{prompts.CATEGORIZATION_ROLE}\n\n{self.description}"

    def examples(self) -> List[Tuple[str, str]]:
        return list(self._examples)

    def finalize_derived(self, original, derived):
        if derived is None or not derived.strip():
            return UNCERTAIN
        return derived
