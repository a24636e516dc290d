"""
Character budget chunking strategy.

Assigns every entity the chunk number floor(cumulative_length / budget) + 1,
where cumulative_length is the running character count over the whole list
including the entity itself. Entities sharing a number share a chunk, so
membership is monotonic in the running length and nothing is reordered.
"""

from typing import Optional

from .base import ChunkingStrategy


class CharacterBudgetChunkingStrategy(ChunkingStrategy):
    """Chunking strategy based on a running character count."""

    def __init__(self, budget: int = 5000):
        if budget <= 0:
            raise ValueError(f"Chunk budget must be positive, got {budget}")
        self.budget = budget

    def chunk_number(self, cumulative_length: int) -> int:
        """Raw chunk number for a running character count."""
        return cumulative_length // self.budget + 1

    def initialize_chunk_context(
        self,
        first_item: str,
        first_index: int,
        previous_context: Optional[dict] = None,
    ) -> dict:
        context = super().initialize_chunk_context(
            first_item, first_index, previous_context
        )
        context["chunk_number"] = self.chunk_number(context["cumulative_length"])
        return context

    def should_start_new_chunk(
        self, current_item: str, current_index: int, chunk_context: dict
    ) -> bool:
        """Start new chunk when the running length crosses a budget boundary."""
        cumulative = chunk_context.get("cumulative_length", 0) + len(current_item)
        return self.chunk_number(cumulative) != chunk_context.get("chunk_number", 1)
