"""
Step 2: Context Assembly

Builds the user message for one chunk. Sections appear in a fixed order and
empty sections are left out:

1. Few-shot examples (first chunk only)
2. Already resolved rows, so later chunks stay consistent with earlier ones
3. Lookahead items from later chunks, for awareness only
   (operations without carried context send the reference list instead)
4. The items to resolve now
5. A reminder of the required reply shape

Sections 2 and 3 are what let a stateless service choose one canonical form
across the whole input instead of a locally plausible one per chunk.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from reconciliation.strategies.operations import BaseOperation

from .a_chunk_planning import Chunk

logger = logging.getLogger(__name__)


@dataclass
class PromptSegment:
    """One titled block of the user message."""

    name: str
    message: str
    lines: List[str] = field(default_factory=list)

    def render(self) -> str:
        if not self.lines:
            return self.message
        return self.message + "\n\n" + "\n".join(self.lines)


@dataclass
class PromptContext:
    """The per-chunk assembly of prompt segments."""

    chunk_index: int
    chunk_count: int
    segments: List[PromptSegment]
    single_chunk: bool = False

    def segment(self, name: str) -> Optional[PromptSegment]:
        for segment in self.segments:
            if segment.name == name:
                return segment
        return None

    @property
    def segment_names(self) -> List[str]:
        return [segment.name for segment in self.segments]

    def render(self) -> str:
        return "\n\n".join(segment.render() for segment in self.segments if segment.message)


def format_pair(original: str, derived: Optional[str]) -> str:
    """Render one (original, derived) pair as a json array on a single line."""
    return json.dumps([original, derived], ensure_ascii=False)


class ContextAssembler:
    """Builds the outbound instruction for each chunk of an operation."""

    def __init__(self, operation: BaseOperation):
        self.operation = operation

    def assemble(
        self,
        chunk: Chunk,
        resolved: Sequence[Tuple[str, Optional[str]]],
        upcoming: Sequence[Chunk],
        chunk_count: int,
    ) -> PromptContext:
        """
        Assemble the prompt context for one chunk.

        Args:
            chunk: The chunk to resolve now
            resolved: (original, derived) pairs accumulated from earlier chunks
            upcoming: Chunks not processed yet
            chunk_count: Total number of chunks in the run

        Returns:
            PromptContext for the chunk
        """
        if chunk_count == 1:
            return self.assemble_single(chunk)

        operation = self.operation
        segments = []

        if chunk.index == 1:
            segments.extend(self._example_segments())

        if operation.carries_context:
            if resolved:
                segments.append(
                    PromptSegment(
                        name="resolved",
                        message=operation.resolved_message,
                        lines=[format_pair(original, derived) for original, derived in resolved],
                    )
                )
            lookahead = [text for later in upcoming for text in later.texts]
            if lookahead:
                segments.append(
                    PromptSegment(
                        name="lookahead",
                        message=operation.lookahead_message,
                        lines=lookahead,
                    )
                )
        else:
            segments.extend(self._reference_segments())

        segments.append(
            PromptSegment(
                name="current", message=operation.current_message, lines=chunk.texts
            )
        )
        segments.extend(self._reminder_segments())

        context = PromptContext(
            chunk_index=chunk.index, chunk_count=chunk_count, segments=segments
        )
        logger.debug(
            f"Assembled chunk {chunk.index}/{chunk_count} with sections "
            f"{context.segment_names}"
        )
        return context

    def assemble_single(self, chunk: Chunk) -> PromptContext:
        """
        Fast path for input that fits one chunk: process the whole list.

        There is nothing resolved yet and nothing left to look ahead to, so
        only examples, the reference list, the items and the reminder remain.
        """
        segments = self._example_segments()
        if not self.operation.carries_context:
            segments.extend(self._reference_segments())
        segments.append(
            PromptSegment(
                name="current",
                message=self.operation.single_chunk_message,
                lines=chunk.texts,
            )
        )
        segments.extend(self._reminder_segments())
        return PromptContext(
            chunk_index=chunk.index, chunk_count=1, segments=segments, single_chunk=True
        )

    def _example_segments(self) -> List[PromptSegment]:
        examples = self.operation.examples()
        if not examples:
            return []
        return [
            PromptSegment(
                name="examples",
                message=self.operation.examples_message,
                lines=[format_pair(entity, label) for entity, label in examples],
            )
        ]

    def _reference_segments(self) -> List[PromptSegment]:
        reference = self.operation.reference_items()
        if not reference:
            return []
        return [
            PromptSegment(
                name="reference",
                message=self.operation.reference_message,
                lines=reference,
            )
        ]

    def _reminder_segments(self) -> List[PromptSegment]:
        if not self.operation.reminder:
            return []
        return [PromptSegment(name="reminder", message=self.operation.reminder)]
