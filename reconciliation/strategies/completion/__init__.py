"""
Completion Strategies

Each strategy represents a chat-completion provider. All of them send one
system message and one user message and report a CompletionOutcome.
"""

from .base import BaseCompletionStrategy, CompletionOutcome
from .groq_strategy import GroqCompletionStrategy
from .openai_strategy import OpenAICompletionStrategy
from .openrouter_strategy import OpenRouterCompletionStrategy

__all__ = [
    "BaseCompletionStrategy",
    "CompletionOutcome",
    "GroqCompletionStrategy",
    "OpenAICompletionStrategy",
    "OpenRouterCompletionStrategy",
]
