"""
Step 3: Response Parsing

Turns a CompletionOutcome into result rows in two stages:

1. Completion status: only a normal "stop" is accepted. Any other finish
   reason (length, content_filter, ...) means the payload may be truncated,
   so the content is not decoded at all.
2. Payload: the message content must decode as one json object whose
   operation key holds an array of [original, derived] pairs.

Any deviation raises; nothing is repaired or guessed.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from reconciliation.exceptions import (
    MalformedResponse,
    NonSuccessCompletion,
    SchemaMismatch,
    TransportError,
)
from reconciliation.strategies.completion import CompletionOutcome

logger = logging.getLogger(__name__)

SUCCESS_FINISH_REASON = "stop"


@dataclass(frozen=True)
class ResultRow:
    """One input entity and the value derived for it."""

    original: str
    derived: Optional[str]

    def as_pair(self):
        return (self.original, self.derived)


class ResponseParser:
    """Validates completion status and decodes the reply payload."""

    def __init__(self, result_key: str = "entities"):
        """
        Initialize the parser.

        Args:
            result_key: Key of the pair array in the reply object
                        ("entities" or "matches")
        """
        self.result_key = result_key

    def parse(
        self, outcome: CompletionOutcome, chunk_index: Optional[int] = None
    ) -> List[ResultRow]:
        """
        Parse one completion outcome into result rows.

        Args:
            outcome: Outcome reported by the completion strategy
            chunk_index: Chunk the outcome belongs to, for error reporting

        Returns:
            Rows in the order the service returned them

        Raises:
            TransportError: The request never produced a response
            NonSuccessCompletion: The finish reason is not "stop"
            MalformedResponse: The content is not the expected object
            SchemaMismatch: A row is not a pair of text values
        """
        if not outcome.success:
            raise TransportError(
                outcome.error or "Completion request failed",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )

        if outcome.finish_reason != SUCCESS_FINISH_REASON:
            logger.error(
                f"Completion finished with {outcome.finish_reason!r} "
                f"instead of {SUCCESS_FINISH_REASON!r}"
            )
            raise NonSuccessCompletion(
                outcome.finish_reason,
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )

        payload = self.decode_payload(outcome, chunk_index)
        return self.validate_rows(payload, outcome, chunk_index)

    def decode_payload(
        self, outcome: CompletionOutcome, chunk_index: Optional[int] = None
    ) -> list:
        """Decode the message content and return the pair array under the result key."""
        content = outcome.content
        if not isinstance(content, str) or not content.strip():
            raise MalformedResponse(
                "Empty message content",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )

        try:
            decoded = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedResponse(
                f"Message content is not valid json: {e}",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            ) from e

        if not isinstance(decoded, dict):
            raise MalformedResponse(
                f"Expected a json object, got {type(decoded).__name__}",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )

        if self.result_key not in decoded:
            raise MalformedResponse(
                f"Reply object has no {self.result_key!r} key "
                f"(keys: {sorted(decoded)})",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )

        payload = decoded[self.result_key]
        if not isinstance(payload, list):
            raise MalformedResponse(
                f"{self.result_key!r} must be an array, got {type(payload).__name__}",
                chunk_index=chunk_index,
                raw_response=outcome.raw_response,
            )
        return payload

    def validate_rows(
        self,
        payload: List[Any],
        outcome: CompletionOutcome,
        chunk_index: Optional[int] = None,
    ) -> List[ResultRow]:
        """Check that every element is an [original, derived] pair of text values."""
        rows = []
        for position, element in enumerate(payload):
            if not isinstance(element, list) or len(element) != 2:
                raise SchemaMismatch(
                    f"Row {position} is not a two-element array: {element!r}",
                    chunk_index=chunk_index,
                    raw_response=outcome.raw_response,
                )
            original, derived = element
            if not isinstance(original, str):
                raise SchemaMismatch(
                    f"Row {position} original is not text: {original!r}",
                    chunk_index=chunk_index,
                    raw_response=outcome.raw_response,
                )
            if derived is not None and not isinstance(derived, str):
                raise SchemaMismatch(
                    f"Row {position} derived value is not text: {derived!r}",
                    chunk_index=chunk_index,
                    raw_response=outcome.raw_response,
                )
            rows.append(ResultRow(original=original, derived=derived))
        return rows
