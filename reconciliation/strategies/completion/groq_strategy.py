"""
Groq completion strategy.

Uses the Groq API, which follows the OpenAI chat-completions request shape.
"""

import logging
import os
from typing import Optional

from .base import BaseCompletionStrategy, CompletionOutcome

logger = logging.getLogger(__name__)


class GroqCompletionStrategy(BaseCompletionStrategy):
    """Completion strategy using the Groq API."""

    provider = "groq"

    def __init__(
        self,
        model: str = "llama-3.3-70b-versatile",
        api_key: Optional[str] = None,
        seed: Optional[int] = None,
        timeout: Optional[float] = 300,
        temperature: float = 0.0,
        **kwargs,
    ):
        """
        Initialize the Groq completion strategy.

        Args:
            model: The Groq model to use (e.g., 'llama-3.3-70b-versatile')
            api_key: The Groq API key (uses GROQ_API_KEY env var if not provided)
            seed: Optional seed for reduced variance
            timeout: Request timeout in seconds
            temperature: Sampling temperature
            **kwargs: Additional configuration options
        """
        super().__init__(model, seed=seed, timeout=timeout, **kwargs)
        self.api_key = api_key or os.getenv("GROQ_API_KEY")
        self.temperature = temperature

        if not self.api_key:
            logger.error("GROQ_API_KEY is not set in environment")
            raise RuntimeError("GROQ_API_KEY is not set in environment")

        logger.info(f"Initialized Groq strategy with model: {self.model}")

    def complete(self, system_prompt: str, user_prompt: str) -> CompletionOutcome:
        """
        Send one request using the Groq API.

        Args:
            system_prompt: The role instruction
            user_prompt: The assembled user message

        Returns:
            CompletionOutcome; SDK errors become a transport failure
        """
        logger.debug(f"System prompt length: {len(system_prompt)} chars")
        logger.debug(f"User prompt length: {len(user_prompt)} chars")

        try:
            from groq import Groq, GroqError
        except ImportError:
            logger.error("Groq library not installed")
            raise RuntimeError(
                "Groq library not installed. Install with: pip install groq"
            ) from None

        client = Groq(api_key=self.api_key, timeout=self.timeout)
        request = self.build_request(system_prompt, user_prompt)
        request["temperature"] = self.temperature

        try:
            logger.debug("Making API call to Groq")
            completion = client.chat.completions.create(**request)
        except GroqError as e:
            logger.error(f"Groq API call failed: {str(e)}")
            return CompletionOutcome.transport_failure(
                f"Groq API call failed: {str(e)}",
                raw_response=getattr(e, "body", None),
            )

        raw = (
            completion.model_dump() if hasattr(completion, "model_dump") else completion
        )
        if not completion.choices:
            return CompletionOutcome.succeeded(None, None, raw)

        choice = completion.choices[0]
        content = choice.message.content or ""
        logger.debug(f"Received response from Groq API: {len(content)} chars")
        return CompletionOutcome.succeeded(choice.finish_reason, content, raw)

    def get_endpoint_info(self) -> dict:
        """Get information about the Groq configuration."""
        info = super().get_endpoint_info()
        info["temperature"] = self.temperature
        info["api_key_set"] = bool(self.api_key)
        return info
