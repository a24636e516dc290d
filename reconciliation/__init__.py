"""
Reconciliation

Consolidates, categorizes and fuzzy-matches entity lists that are too long for
a single request to a chat-completion service, while keeping the results
consistent across all requests:
- Chunk planning and per-chunk context assembly
- Completion strategies for different providers (OpenAI, Groq, OpenRouter)
- Strict parsing of the structured replies
- Sequential orchestration that returns a complete table or fails as a whole
- Name cleaning and table output helpers
"""

from . import prompts, preprocessors, steps, strategies
from .exceptions import (
    CoverageMismatch,
    MalformedResponse,
    NonSuccessCompletion,
    ReconciliationError,
    SchemaMismatch,
    TransportError,
)
from .preprocessors import NameCleaner, strip_names
from .retry_utils import RetryConfig
from .steps.d_orchestration import (
    ResultTable,
    categorize,
    consolidate,
    fuzzy_match,
)
from .strategies.operations import NO_MATCH, UNCERTAIN

__all__ = [
    "prompts",
    "preprocessors",
    "steps",
    "strategies",
    "consolidate",
    "categorize",
    "fuzzy_match",
    "ResultTable",
    "RetryConfig",
    "NameCleaner",
    "strip_names",
    "NO_MATCH",
    "UNCERTAIN",
    "ReconciliationError",
    "TransportError",
    "NonSuccessCompletion",
    "MalformedResponse",
    "SchemaMismatch",
    "CoverageMismatch",
]
