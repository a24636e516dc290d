"""
OpenAI completion strategy.

Uses the OpenAI Chat Completions API with a json object response format.
"""

import logging
import os
from typing import Optional

from .base import BaseCompletionStrategy, CompletionOutcome

logger = logging.getLogger(__name__)


class OpenAICompletionStrategy(BaseCompletionStrategy):
    """Completion strategy using the OpenAI API."""

    provider = "openai"

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: Optional[str] = None,
        seed: Optional[int] = None,
        timeout: Optional[float] = 300,
        **kwargs,
    ):
        """
        Initialize the OpenAI completion strategy.

        Args:
            model: The OpenAI model to use (e.g., 'gpt-4o', 'gpt-4o-mini')
            api_key: The OpenAI API key (uses OPENAI_API_KEY env var if not provided)
            seed: Optional seed, honoured on a best-effort basis by the service
            timeout: Request timeout in seconds
            **kwargs: Additional configuration options
        """
        super().__init__(model, seed=seed, timeout=timeout, **kwargs)
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is not set in environment")

    def complete(self, system_prompt: str, user_prompt: str) -> CompletionOutcome:
        """
        Send one request using the OpenAI Chat Completions API.

        Args:
            system_prompt: The role instruction
            user_prompt: The assembled user message

        Returns:
            CompletionOutcome; SDK errors become a transport failure
        """
        try:
            from openai import OpenAI, OpenAIError
        except ImportError:
            raise RuntimeError(
                "OpenAI library not installed. Install with: pip install openai"
            ) from None

        client = OpenAI(api_key=self.api_key, timeout=self.timeout)
        request = self.build_request(system_prompt, user_prompt)

        logger.debug(f"Making API call to OpenAI model {self.model}")
        try:
            response = client.chat.completions.create(**request)
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            return CompletionOutcome.transport_failure(
                f"OpenAI API call failed: {e}", raw_response=getattr(e, "body", None)
            )

        raw = response.model_dump() if hasattr(response, "model_dump") else response
        if not response.choices:
            return CompletionOutcome.succeeded(None, None, raw)

        choice = response.choices[0]
        return CompletionOutcome.succeeded(
            choice.finish_reason, choice.message.content, raw
        )

    def get_endpoint_info(self) -> dict:
        """Get information about the OpenAI configuration."""
        info = super().get_endpoint_info()
        info["api_key_set"] = bool(self.api_key)
        return info
