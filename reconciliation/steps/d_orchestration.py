"""
Step 4: Orchestration

Drives the chunk sequence of one reconciliation run. The run is a fold over
the planned chunks: each chunk is assembled with the rows accumulated so far,
sent, parsed and checked, and its rows are appended to a new accumulator that
is handed to the next chunk. Chunks are strictly sequential because every
chunk's prompt depends on the rows of all chunks before it.

Per chunk: PENDING -> SENT -> SUCCEEDED | FAILED. A failed chunk aborts the
whole run; the accumulator is discarded and the error, carrying the chunk index
and the raw response, propagates to the caller. A run therefore returns a table
covering every input entity or nothing at all.

Public operations:
- consolidate: canonical spelling per entity
- categorize: label per entity from a described vocabulary
- fuzzy_match: best reference entry per entity, or NO_MATCH
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import (
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)

from reconciliation.config import DEFAULT_MODEL
from reconciliation.exceptions import CoverageMismatch, ReconciliationError
from reconciliation.retry_utils import RetryConfig, call_with_retry
from reconciliation.strategies.chunking import CharacterBudgetChunkingStrategy
from reconciliation.strategies.completion import (
    BaseCompletionStrategy,
    CompletionOutcome,
    GroqCompletionStrategy,
    OpenAICompletionStrategy,
    OpenRouterCompletionStrategy,
)
from reconciliation.strategies.operations import (
    BaseOperation,
    CategorizationOperation,
    ConsolidationOperation,
    FuzzyMatchingOperation,
)

from .a_chunk_planning import Chunk, ChunkPlanner
from .b_context_assembly import ContextAssembler
from .base import BaseStep
from .c_response_parsing import ResponseParser, ResultRow

logger = logging.getLogger(__name__)


class ChunkStatus(Enum):
    """Lifecycle of one chunk within a run."""

    PENDING = "pending"
    SENT = "sent"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ResultTable:
    """Two-column table with one row per input entity."""

    columns: Tuple[str, str]
    rows: Tuple[ResultRow, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ResultRow]:
        return iter(self.rows)

    def originals(self) -> List[str]:
        return [row.original for row in self.rows]

    def derived_values(self) -> List[Optional[str]]:
        return [row.derived for row in self.rows]

    def to_pairs(self) -> List[Tuple[str, Optional[str]]]:
        return [row.as_pair() for row in self.rows]

    def to_dicts(self) -> List[Dict[str, Optional[str]]]:
        first, second = self.columns
        return [{first: row.original, second: row.derived} for row in self.rows]

    def mapping(self) -> Dict[str, Optional[str]]:
        """Original -> derived lookup; the first row wins for repeated originals."""
        lookup: Dict[str, Optional[str]] = {}
        for row in self.rows:
            lookup.setdefault(row.original, row.derived)
        return lookup


class ChunkedReconciler(BaseStep):
    """Runs one operation over an entity list, chunk by chunk."""

    def __init__(
        self,
        operation: BaseOperation,
        completion_strategy: BaseCompletionStrategy,
        retry: Optional[RetryConfig] = None,
        planner: Optional[ChunkPlanner] = None,
        sleep: Callable[[float], None] = time.sleep,
        config: Optional[dict] = None,
    ):
        """
        Initialize the reconciler.

        Args:
            operation: Operation supplying prompts, reply key and columns
            completion_strategy: Strategy that sends requests to the service
            retry: Per-chunk retry policy (single attempt if omitted)
            planner: Chunk planner (character budget of the operation if omitted)
            sleep: Function used to wait between retries
            config: Step configuration; "strict_coverage" (default True) makes a
                    chunk whose rows do not match its items fail the run
        """
        super().__init__(config)
        self.operation = operation
        self.completion_strategy = completion_strategy
        self.retry = retry or RetryConfig()
        self.planner = planner or ChunkPlanner(
            CharacterBudgetChunkingStrategy(operation.budget)
        )
        self.assembler = ContextAssembler(operation)
        self.parser = ResponseParser(operation.result_key)
        self.sleep = sleep
        self.chunk_status: Dict[int, ChunkStatus] = {}

    def process(self, input_data: Sequence[str]) -> ResultTable:
        """
        Reconcile the entity list.

        Args:
            input_data: Entities in input order

        Returns:
            ResultTable with one row per entity

        Raises:
            ReconciliationError: Any chunk failed; no partial table is returned
        """
        texts = list(input_data)
        chunks = self.planner.plan(texts)
        self.chunk_status = {chunk.index: ChunkStatus.PENDING for chunk in chunks}

        self.logger.info(
            f"Running {self.operation.name} over {len(texts)} entities "
            f"in {len(chunks)} chunk(s) with {self.completion_strategy}"
        )

        accumulator: Tuple[ResultRow, ...] = ()
        for chunk in chunks:
            accumulator = self.process_chunk(chunk, chunks, accumulator)

        return ResultTable(columns=self.operation.columns, rows=accumulator)

    def process_chunk(
        self,
        chunk: Chunk,
        chunks: Sequence[Chunk],
        accumulator: Tuple[ResultRow, ...],
    ) -> Tuple[ResultRow, ...]:
        """
        Resolve one chunk and return the extended accumulator.

        The accumulator passed in is never modified.
        """
        total = len(chunks)
        self.logger.info(f"Starting on chunk {chunk.index} of {total}")

        context = self.assembler.assemble(
            chunk,
            resolved=[row.as_pair() for row in accumulator],
            upcoming=chunks[chunk.index:],
            chunk_count=total,
        )
        system_prompt = self.operation.system_prompt()
        user_prompt = context.render()
        self.logger.debug(
            f"Chunk {chunk.index}: {len(chunk)} entities, "
            f"prompt length {len(user_prompt)} chars"
        )

        def attempt() -> List[ResultRow]:
            self.chunk_status[chunk.index] = ChunkStatus.SENT
            outcome = self.completion_strategy.complete(system_prompt, user_prompt)
            rows = self.parser.parse(outcome, chunk_index=chunk.index)
            self._check_coverage(chunk, rows, outcome)
            return rows

        try:
            rows = call_with_retry(
                attempt,
                self.retry,
                sleep=self.sleep,
                description=f"Chunk {chunk.index}/{total}",
            )
        except ReconciliationError as e:
            self.chunk_status[chunk.index] = ChunkStatus.FAILED
            self.logger.error(f"Query not successful ({chunk.index}/{total}): {e}")
            self.logger.debug(f"Last API response: {e.raw_response!r}")
            raise

        self.chunk_status[chunk.index] = ChunkStatus.SUCCEEDED
        self.logger.info(f"Query successful ({chunk.index}/{total}).")

        rows = [
            ResultRow(row.original, self.operation.finalize_derived(row.original, row.derived))
            for row in rows
        ]
        if self.operation.monitors_consistency:
            rows = self._keep_earlier_decisions(accumulator, rows, chunk.index)

        return accumulator + tuple(rows)

    def _check_coverage(
        self, chunk: Chunk, rows: List[ResultRow], outcome: CompletionOutcome
    ) -> None:
        """Every item of the chunk must come back exactly once, and nothing else."""
        expected = Counter(chunk.texts)
        returned = Counter(row.original for row in rows)
        if expected == returned:
            return

        missing = list((expected - returned).elements())
        unexpected = list((returned - expected).elements())
        if self.get_config_value("strict_coverage", True):
            raise CoverageMismatch(
                missing,
                unexpected,
                chunk_index=chunk.index,
                raw_response=outcome.raw_response,
            )
        self.logger.warning(
            f"Chunk {chunk.index} coverage mismatch: "
            f"missing {missing!r}, unexpected {unexpected!r}"
        )

    def _keep_earlier_decisions(
        self,
        accumulator: Tuple[ResultRow, ...],
        rows: List[ResultRow],
        chunk_index: int,
    ) -> List[ResultRow]:
        """An entity already resolved in an earlier chunk keeps its earlier value."""
        earlier: Dict[str, Optional[str]] = {}
        for row in accumulator:
            earlier.setdefault(row.original, row.derived)

        kept = []
        for row in rows:
            if row.original in earlier and earlier[row.original] != row.derived:
                self.logger.warning(
                    f"Chunk {chunk_index} resolved {row.original!r} to "
                    f"{row.derived!r}, keeping earlier {earlier[row.original]!r}"
                )
                row = ResultRow(row.original, earlier[row.original])
            kept.append(row)
        return kept

    def describe(self) -> str:
        return f"{self.operation.name.capitalize()} run"

    def _log_step_result(self, result: ResultTable):
        distinct = len(set(result.derived_values()))
        self.logger.debug(
            f"{len(result)} rows, {distinct} distinct {result.columns[1]} values"
        )


def create_completion_strategy(
    model: str,
    api_key: Optional[str] = None,
    seed: Optional[int] = None,
    timeout: Optional[float] = None,
) -> BaseCompletionStrategy:
    """
    Create a completion strategy based on the model name.

    Args:
        model: "provider/model" (openai/, groq/, openrouter/) or a bare OpenAI model name
        api_key: API key for the provider (environment variable if omitted)
        seed: Optional seed
        timeout: Request timeout in seconds (provider default if omitted)

    Returns:
        Configured completion strategy instance
    """
    options = {"api_key": api_key, "seed": seed}
    if timeout is not None:
        options["timeout"] = timeout

    if model.startswith("openai/"):
        return OpenAICompletionStrategy(model=model[len("openai/"):], **options)
    elif model.startswith("groq/"):
        return GroqCompletionStrategy(model=model[len("groq/"):], **options)
    elif model.startswith("openrouter/"):
        return OpenRouterCompletionStrategy(
            model=model[len("openrouter/"):], **options
        )
    elif "/" in model:
        raise ValueError(
            f"Unsupported model format: {model}. Use 'provider/model' with "
            f"provider openai, groq or openrouter, or a bare OpenAI model name"
        )
    return OpenAICompletionStrategy(model=model, **options)


def _validate_items(items: Iterable[str], label: str = "items") -> List[str]:
    texts = list(items)
    for position, text in enumerate(texts):
        if not isinstance(text, str):
            raise TypeError(
                f"{label} must contain strings, got {type(text).__name__} at position {position}"
            )
    return texts


def run_operation(
    operation: BaseOperation,
    items: Iterable[str],
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    seed: Optional[int] = None,
    strategy: Optional[BaseCompletionStrategy] = None,
    retry: Optional[RetryConfig] = None,
    timeout: Optional[float] = None,
    strict_coverage: bool = True,
) -> ResultTable:
    """Run an operation over the items with a strategy built from the model name."""
    texts = _validate_items(items)
    if not texts:
        logger.info(f"No entities given, skipping {operation.name}")
        return ResultTable(columns=operation.columns)

    if strategy is None:
        strategy = create_completion_strategy(
            model, api_key=api_key, seed=seed, timeout=timeout
        )
    reconciler = ChunkedReconciler(
        operation,
        strategy,
        retry=retry,
        config={"strict_coverage": strict_coverage},
    )
    return reconciler.execute(texts)


def consolidate(
    api_key: Optional[str],
    items: Iterable[str],
    model: str = DEFAULT_MODEL,
    seed: Optional[int] = None,
    *,
    strategy: Optional[BaseCompletionStrategy] = None,
    retry: Optional[RetryConfig] = None,
    budget: Optional[int] = None,
    timeout: Optional[float] = None,
) -> ResultTable:
    """
    Consolidate spelling variants of entity names into canonical forms.

    Args:
        api_key: API key for the completion provider
        items: Entity names
        model: Model name, optionally prefixed with its provider
        seed: Optional seed for reduced run-to-run variance
        strategy: Ready completion strategy, used instead of model/api_key
        retry: Per-chunk retry policy
        budget: Characters per chunk (5,000 if omitted)
        timeout: Request timeout in seconds

    Returns:
        ResultTable with columns (entity, consolidated)

    Example:
        >>> table = consolidate(key, ["ExxonMobil", "Exxon Mobil", "ExxonMobil Corporation"])
        >>> table.mapping()["Exxon Mobil"]
        'ExxonMobil'
    """
    return run_operation(
        ConsolidationOperation(budget=budget),
        items,
        api_key=api_key,
        model=model,
        seed=seed,
        strategy=strategy,
        retry=retry,
        timeout=timeout,
    )


def categorize(
    api_key: Optional[str],
    items: Iterable[str],
    description: str,
    examples: Optional[Sequence[Tuple[str, str]]] = None,
    model: str = DEFAULT_MODEL,
    seed: Optional[int] = None,
    *,
    strategy: Optional[BaseCompletionStrategy] = None,
    retry: Optional[RetryConfig] = None,
    budget: Optional[int] = None,
    timeout: Optional[float] = None,
) -> ResultTable:
    """
    Label entities with categories described in natural language.

    Args:
        api_key: API key for the completion provider
        items: Entity names
        description: Description of the categories and the labels to use
        examples: Optional (entity, label) pairs shown once to steer labelling;
                  they are not part of the returned table
        model: Model name, optionally prefixed with its provider
        seed: Optional seed
        strategy: Ready completion strategy, used instead of model/api_key
        retry: Per-chunk retry policy
        budget: Characters per chunk (6,100 if omitted)
        timeout: Request timeout in seconds

    Returns:
        ResultTable with columns (entity, label); undecidable entities carry "uncertain"
    """
    return run_operation(
        CategorizationOperation(description, examples=examples, budget=budget),
        items,
        api_key=api_key,
        model=model,
        seed=seed,
        strategy=strategy,
        retry=retry,
        timeout=timeout,
    )


def fuzzy_match(
    api_key: Optional[str],
    primary: Iterable[str],
    reference: Iterable[str],
    model: str = DEFAULT_MODEL,
    seed: Optional[int] = None,
    *,
    strategy: Optional[BaseCompletionStrategy] = None,
    retry: Optional[RetryConfig] = None,
    budget: Optional[int] = None,
    timeout: Optional[float] = None,
) -> ResultTable:
    """
    Match every entity of the primary list against a reference list.

    The primary list is chunked; the reference list is sent whole with every
    chunk. Entities without a match carry NO_MATCH (None).

    Returns:
        ResultTable with columns (entity, match)
    """
    reference_texts = _validate_items(reference, label="reference")
    return run_operation(
        FuzzyMatchingOperation(reference_texts, budget=budget),
        primary,
        api_key=api_key,
        model=model,
        seed=seed,
        strategy=strategy,
        retry=retry,
        timeout=timeout,
    )
