"""
Reconciliation Strategies Package

This package contains the strategy implementations used by the reconciliation steps:
- Chunking strategies for cutting entity lists into request-sized chunks
- Completion strategies for different chat-completion providers (OpenAI, Groq, OpenRouter)
- Operation strategies for consolidation, categorization and fuzzy matching

All strategies follow their respective abstract base classes and implement the Strategy pattern.
"""

from . import chunking, completion, operations

__all__ = ["chunking", "completion", "operations"]
