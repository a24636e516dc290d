"""
Base chunking strategy interface.

Defines the abstract base class for all chunking strategies that decide where
an ordered list of entities is cut into request-sized chunks.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def should_start_new_chunk(
        self, current_item: str, current_index: int, chunk_context: dict
    ) -> bool:
        """
        Determine if a new chunk should be started at this item.

        Args:
            current_item: The entity text being placed
            current_index: Position of the entity in the input list
            chunk_context: Dictionary containing context about the current chunk
                          (e.g., start_index, item_count, cumulative_length)

        Returns:
            True if a new chunk should be started
        """
        pass

    def initialize_chunk_context(
        self,
        first_item: str,
        first_index: int,
        previous_context: Optional[dict] = None,
    ) -> dict:
        """
        Initialize context for a new chunk.

        The running character count is carried over from the previous chunk
        so that strategies can reason about the whole list, not just the chunk.

        Args:
            first_item: First entity of the new chunk
            first_index: Position of the first entity
            previous_context: Context of the chunk that was just closed, if any

        Returns:
            Dictionary with initial chunk context
        """
        carried = previous_context["cumulative_length"] if previous_context else 0
        return {
            "start_index": first_index,
            "item_count": 1,
            "char_count": len(first_item),
            "cumulative_length": carried + len(first_item),
        }

    def update_chunk_context(self, context: dict, item: str, item_index: int) -> None:
        """
        Update chunk context with information from the current item.

        Args:
            context: Current chunk context to update
            item: Entity being added to the chunk
            item_index: Position of the entity
        """
        context["item_count"] += 1
        context["char_count"] += len(item)
        context["cumulative_length"] += len(item)
