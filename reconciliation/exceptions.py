"""
Exceptions for chunked reconciliation runs.

Every failure aborts the whole multi-chunk run. Each exception carries the
index of the chunk that failed and the raw service response so the caller can
diagnose the problem and re-run from scratch.
"""

from typing import Any, Optional


class ReconciliationError(Exception):
    """Base exception for all reconciliation failures."""

    reason = "reconciliation_error"

    def __init__(
        self,
        message: str,
        chunk_index: Optional[int] = None,
        raw_response: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.chunk_index = chunk_index
        self.raw_response = raw_response

    def __str__(self) -> str:
        if self.chunk_index is not None:
            return f"{self.message} (chunk {self.chunk_index})"
        return self.message


class TransportError(ReconciliationError):
    """The completion service could not be reached or timed out."""

    reason = "transport_error"


class NonSuccessCompletion(ReconciliationError):
    """The service finished for a reason other than a normal stop."""

    reason = "non_success_completion"

    def __init__(
        self,
        finish_reason: Optional[str],
        chunk_index: Optional[int] = None,
        raw_response: Any = None,
    ):
        super().__init__(
            f"Query not successful, finish_reason={finish_reason!r}",
            chunk_index=chunk_index,
            raw_response=raw_response,
        )
        self.finish_reason = finish_reason


class MalformedResponse(ReconciliationError):
    """The message content does not decode into the expected pair array."""

    reason = "malformed_response"


class SchemaMismatch(MalformedResponse):
    """A decoded row does not have exactly two text fields."""

    reason = "schema_mismatch"


class CoverageMismatch(ReconciliationError):
    """The rows returned for a chunk do not cover its items one to one."""

    reason = "coverage_mismatch"

    def __init__(
        self,
        missing: list,
        unexpected: list,
        chunk_index: Optional[int] = None,
        raw_response: Any = None,
    ):
        parts = []
        if missing:
            parts.append(f"missing {missing!r}")
        if unexpected:
            parts.append(f"unexpected {unexpected!r}")
        super().__init__(
            "Response does not cover the chunk: " + "; ".join(parts),
            chunk_index=chunk_index,
            raw_response=raw_response,
        )
        self.missing = missing
        self.unexpected = unexpected
