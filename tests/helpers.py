"""
Test helpers: a scripted completion strategy that never touches the network,
plus builders for service replies.
"""

import json
from typing import Callable, Dict, List, Optional, Tuple

from reconciliation.strategies.completion import BaseCompletionStrategy, CompletionOutcome
from reconciliation.strategies.operations import BaseOperation


def reply(pairs, key: str = "entities", finish_reason: str = "stop") -> CompletionOutcome:
    """A successful outcome whose content holds the given pairs under `key`."""
    content = json.dumps({key: [list(pair) for pair in pairs]})
    raw = {"choices": [{"finish_reason": finish_reason, "message": {"content": content}}]}
    return CompletionOutcome.succeeded(finish_reason, content, raw)


def current_items(user_prompt: str, operation: BaseOperation) -> List[str]:
    """The items a user message asks to resolve right away."""
    for marker in (operation.current_message, operation.single_chunk_message):
        if marker in user_prompt:
            start = user_prompt.index(marker) + len(marker)
            block = user_prompt[start:].lstrip("\n").split("\n\n", 1)[0]
            return [line for line in block.split("\n") if line]
    raise AssertionError("No current items section in prompt")


class ScriptedCompletionStrategy(BaseCompletionStrategy):
    """
    Completion strategy answering from a script.

    Ready outcomes are consumed one per call; once they run out the responder,
    if any, computes the outcome from the prompts. Every call is recorded.
    """

    provider = "scripted"

    def __init__(
        self,
        outcomes: Optional[List[CompletionOutcome]] = None,
        responder: Optional[Callable[[str, str], CompletionOutcome]] = None,
    ):
        super().__init__("scripted-model")
        self.outcomes = list(outcomes or [])
        self.responder = responder
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> CompletionOutcome:
        self.calls.append((system_prompt, user_prompt))
        if self.outcomes:
            return self.outcomes.pop(0)
        if self.responder is not None:
            return self.responder(system_prompt, user_prompt)
        raise AssertionError("Scripted strategy ran out of outcomes")

    @property
    def user_prompts(self) -> List[str]:
        return [user for _, user in self.calls]


def mapping_responder(operation: BaseOperation, mapping: Dict[str, Optional[str]]):
    """Answer every current item with mapping.get(item, item)."""

    def respond(system_prompt: str, user_prompt: str) -> CompletionOutcome:
        items = current_items(user_prompt, operation)
        return reply(
            [(item, mapping.get(item, item)) for item in items],
            key=operation.result_key,
        )

    return respond


def function_responder(operation: BaseOperation, derive: Callable[[str], Optional[str]]):
    """Answer every current item with derive(item)."""

    def respond(system_prompt: str, user_prompt: str) -> CompletionOutcome:
        items = current_items(user_prompt, operation)
        return reply([(item, derive(item)) for item in items], key=operation.result_key)

    return respond
