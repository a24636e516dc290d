"""
Tests for chunk planning and the chunking strategies.
"""

import logging
import random

import pytest

from reconciliation.steps.a_chunk_planning import (
    ChunkPlanner,
    assign_chunk_indices,
    plan_chunks,
)
from reconciliation.strategies.chunking import (
    CharacterBudgetChunkingStrategy,
    ItemCountChunkingStrategy,
)


class TestAssignChunkIndices:
    def test_running_length_boundaries(self):
        texts = ["a" * 3000, "b" * 3000, "c" * 3000]
        assert assign_chunk_indices(texts, 5000) == [1, 2, 2]

    def test_exact_multiple_starts_next_chunk(self):
        assert assign_chunk_indices(["a" * 2500, "b" * 2500], 5000) == [1, 2]

    def test_oversized_entity_skips_numbers(self):
        texts = ["a" * 4990, "x" * 12000, "b" * 5000]
        assert assign_chunk_indices(texts, 5000) == [1, 4, 5]

    def test_monotonic(self):
        rng = random.Random(7)
        texts = ["e" * rng.randint(1, 400) for _ in range(300)]
        indices = assign_chunk_indices(texts, 1000)
        assert indices == sorted(indices)


class TestChunkPlanner:
    def test_example_split(self):
        texts = ["a" * 3000, "b" * 3000, "c" * 3000]
        chunks = plan_chunks(texts, 5000)

        assert [chunk.index for chunk in chunks] == [1, 2]
        assert chunks[0].texts == ["a" * 3000]
        assert chunks[1].texts == ["b" * 3000, "c" * 3000]

    def test_small_input_is_one_chunk(self):
        texts = ["ExxonMobil", "Exxon Mobil", "ExxonMobil Corporation"]
        chunks = plan_chunks(texts, 5000)
        assert len(chunks) == 1
        assert chunks[0].texts == texts

    def test_empty_input(self):
        assert plan_chunks([], 5000) == []

    def test_partition_is_exact_and_ordered(self):
        rng = random.Random(11)
        texts = [f"entity {i} " + "x" * rng.randint(0, 250) for i in range(500)]
        chunks = plan_chunks(texts, 5000)

        assert [text for chunk in chunks for text in chunk.texts] == texts
        assert [chunk.index for chunk in chunks] == list(range(1, len(chunks) + 1))
        positions = [item.position for chunk in chunks for item in chunk.items]
        assert positions == list(range(len(texts)))

    def test_membership_follows_running_length(self):
        rng = random.Random(3)
        texts = ["y" * rng.randint(1, 900) for _ in range(120)]
        raw = assign_chunk_indices(texts, 2000)
        chunks = plan_chunks(texts, 2000)

        planned = [chunk.index for chunk in chunks for _ in chunk.items]
        # Same grouping as the raw numbers, renumbered without gaps
        renumber = {value: n for n, value in enumerate(sorted(set(raw)), start=1)}
        assert planned == [renumber[value] for value in raw]

    def test_oversized_entity_gets_own_chunk(self, caplog):
        texts = ["a" * 4990, "x" * 12000, "b" * 5000]
        with caplog.at_level(logging.WARNING):
            chunks = plan_chunks(texts, 5000)

        assert [len(chunk) for chunk in chunks] == [1, 1, 1]
        assert [chunk.index for chunk in chunks] == [1, 2, 3]
        assert "longer than the chunk budget" in caplog.text

    def test_chunk_char_count(self):
        chunks = plan_chunks(["abc", "de"], 100)
        assert chunks[0].char_count == 5

    def test_item_count_strategy(self):
        planner = ChunkPlanner(ItemCountChunkingStrategy(max_items=2))
        chunks = planner.plan(["a", "b", "c", "d", "e"])
        assert [chunk.texts for chunk in chunks] == [["a", "b"], ["c", "d"], ["e"]]


class TestStrategyConfig:
    def test_character_budget_from_config(self):
        strategy = ChunkPlanner.create_strategy_from_config(
            {"type": "character_budget", "budget": 6100}
        )
        assert isinstance(strategy, CharacterBudgetChunkingStrategy)
        assert strategy.budget == 6100

    def test_item_count_from_config(self):
        strategy = ChunkPlanner.create_strategy_from_config({"type": "item_count"})
        assert isinstance(strategy, ItemCountChunkingStrategy)
        assert strategy.max_items == 200

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            ChunkPlanner.create_strategy_from_config({"type": "sentences"})

    @pytest.mark.parametrize("budget", [0, -5])
    def test_budget_must_be_positive(self, budget):
        with pytest.raises(ValueError):
            CharacterBudgetChunkingStrategy(budget)
