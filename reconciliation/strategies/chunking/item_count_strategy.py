"""
Item count-based chunking strategy.

Starts new chunks when the number of entities reaches a threshold. Useful for
models whose reply length, rather than request length, is the binding limit.
"""

from .base import ChunkingStrategy


class ItemCountChunkingStrategy(ChunkingStrategy):
    """Chunking strategy based on number of entities."""

    def __init__(self, max_items: int = 200):
        if max_items <= 0:
            raise ValueError(f"max_items must be positive, got {max_items}")
        self.max_items = max_items

    def should_start_new_chunk(
        self, current_item: str, current_index: int, chunk_context: dict
    ) -> bool:
        """Start new chunk if the item count reached the threshold."""
        return chunk_context.get("item_count", 0) >= self.max_items
