"""
Consolidation operation.

Maps every entity to a canonical spelling. Variants, subunits and business
divisions of the same organisation share one canonical form; entities that
need no change map to themselves.
"""

from reconciliation.prompts import consolidation as prompts

from .base import BaseOperation


class ConsolidationOperation(BaseOperation):
    """Canonical-name consolidation."""

    name = "consolidation"
    result_key = "entities"
    columns = ("entity", "consolidated")
    default_budget = 5000
    monitors_consistency = True

    single_chunk_message = prompts.SINGLE_CHUNK_MESSAGE
    resolved_message = prompts.RESOLVED_MESSAGE
    lookahead_message = prompts.LOOKAHEAD_MESSAGE
    current_message = prompts.CURRENT_MESSAGE
    reminder = prompts.REMINDER

    def system_prompt(self) -> str:
        return prompts.CONSOLIDATION_ROLE

    def finalize_derived(self, original, derived):
        # An entity without a proposed consolidation keeps its own spelling
        if derived is None or not derived.strip():
            return original
        return derived
