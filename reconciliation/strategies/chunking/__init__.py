"""
Chunking Strategies Package

Contains the chunking strategy implementations used by the chunk planner.
"""

from .base import ChunkingStrategy
from .character_budget_strategy import CharacterBudgetChunkingStrategy
from .item_count_strategy import ItemCountChunkingStrategy

__all__ = [
    "ChunkingStrategy",
    "CharacterBudgetChunkingStrategy",
    "ItemCountChunkingStrategy",
]
