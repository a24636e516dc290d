"""
Step 1: Chunk Planning

Splits an ordered list of entities into contiguous chunks that each fit one
request to the completion service. Chunking is delegated to a pluggable
strategy; the default is the character budget strategy.

Chunks partition the input exactly: concatenated in order they reproduce the
input list. Chunks are numbered 1..n without gaps.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from reconciliation.strategies.chunking import (
    CharacterBudgetChunkingStrategy,
    ChunkingStrategy,
    ItemCountChunkingStrategy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """An entity string and its position in the input list."""

    text: str
    position: int


@dataclass(frozen=True)
class Chunk:
    """A contiguous run of items sent together in one request."""

    index: int
    items: Tuple[Item, ...]

    @property
    def texts(self) -> List[str]:
        return [item.text for item in self.items]

    @property
    def char_count(self) -> int:
        return sum(len(item.text) for item in self.items)

    def __len__(self) -> int:
        return len(self.items)


def assign_chunk_indices(texts: Sequence[str], budget: int) -> List[int]:
    """
    Raw chunk number for every entity: floor(cumulative_length / budget) + 1.

    The numbers are monotonic but may skip values when a single entity is
    longer than the budget. ChunkPlanner renumbers the resulting groups.
    """
    strategy = CharacterBudgetChunkingStrategy(budget)
    cumulative = 0
    indices = []
    for text in texts:
        cumulative += len(text)
        indices.append(strategy.chunk_number(cumulative))
    return indices


class ChunkPlanner:
    """Lightweight chunking engine that uses pluggable strategies."""

    def __init__(self, strategy: ChunkingStrategy):
        self.strategy = strategy

    def plan(self, texts: Sequence[str]) -> List[Chunk]:
        """
        Create chunks using the configured strategy.

        Args:
            texts: Entities in input order

        Returns:
            Chunks numbered from 1, in input order
        """
        groups: List[List[Item]] = []
        current: List[Item] = []
        context: dict = {}

        for position, text in enumerate(texts):
            item = Item(text=text, position=position)

            if current and self.strategy.should_start_new_chunk(
                text, position, context
            ):
                groups.append(current)
                current = [item]
                context = self.strategy.initialize_chunk_context(
                    text, position, previous_context=context
                )
            elif not current:
                current = [item]
                context = self.strategy.initialize_chunk_context(text, position)
            else:
                current.append(item)
                self.strategy.update_chunk_context(context, text, position)

        if current:
            groups.append(current)

        chunks = [
            Chunk(index=number, items=tuple(group))
            for number, group in enumerate(groups, start=1)
        ]

        budget = getattr(self.strategy, "budget", None)
        if budget is not None:
            for chunk in chunks:
                if len(chunk) == 1 and chunk.char_count > budget:
                    logger.warning(
                        f"Entity at position {chunk.items[0].position} is longer "
                        f"than the chunk budget ({chunk.char_count} > {budget}) "
                        f"and is sent as its own chunk"
                    )

        logger.debug(
            f"Planned {len(chunks)} chunks for {len(texts)} entities "
            f"using {self.strategy.__class__.__name__}"
        )
        return chunks

    @staticmethod
    def create_strategy_from_config(config: dict) -> ChunkingStrategy:
        """Create a chunking strategy from configuration dictionary."""
        strategy_type = config.get("type", "character_budget")

        if strategy_type == "character_budget":
            budget = config.get("budget", 5000)
            return CharacterBudgetChunkingStrategy(budget)

        elif strategy_type == "item_count":
            max_items = config.get("max_items", 200)
            return ItemCountChunkingStrategy(max_items)

        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")


def plan_chunks(texts: Sequence[str], budget: int) -> List[Chunk]:
    """Plan chunks with the character budget strategy."""
    return ChunkPlanner(CharacterBudgetChunkingStrategy(budget)).plan(texts)
