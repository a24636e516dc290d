"""
OpenRouter completion strategy.

Reaches the extended model catalogue on OpenRouter through its
OpenAI-compatible chat-completions endpoint with plain HTTP requests.
"""

import logging
import os
from typing import Optional

import requests

from .base import BaseCompletionStrategy, CompletionOutcome

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterCompletionStrategy(BaseCompletionStrategy):
    """Completion strategy using the OpenRouter API."""

    provider = "openrouter"

    def __init__(
        self,
        model: str = "openai/gpt-4o",
        api_key: Optional[str] = None,
        referer: Optional[str] = None,
        seed: Optional[int] = None,
        timeout: Optional[float] = 1500,
        url: str = OPENROUTER_URL,
        **kwargs,
    ):
        """
        Initialize the OpenRouter completion strategy.

        Args:
            model: The OpenRouter model slug (e.g., 'anthropic/claude-3.5-sonnet')
            api_key: The OpenRouter API key (uses OPENROUTER_API_KEY env var if not provided)
            referer: Sent as HTTP-Referer, identifies the calling site to OpenRouter
            seed: Optional seed for reduced variance
            timeout: Request timeout in seconds
            url: Chat-completions endpoint
            **kwargs: Additional configuration options
        """
        super().__init__(model, seed=seed, timeout=timeout, **kwargs)
        self.api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        self.referer = referer or os.getenv(
            "OPENROUTER_REFERER", "http://localhost:3000"
        )
        self.url = url

        if not self.api_key:
            raise RuntimeError("OPENROUTER_API_KEY is not set in environment")

    def complete(self, system_prompt: str, user_prompt: str) -> CompletionOutcome:
        """
        Send one request to the OpenRouter chat-completions endpoint.

        Args:
            system_prompt: The role instruction
            user_prompt: The assembled user message

        Returns:
            CompletionOutcome; HTTP and connection errors become a transport failure
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.referer,
        }
        payload = self.build_request(system_prompt, user_prompt)

        try:
            response = requests.post(
                self.url, headers=headers, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.RequestException as e:
            raw = None
            if getattr(e, "response", None) is not None:
                raw = e.response.text
            logger.error(f"OpenRouter API call failed: {e}")
            return CompletionOutcome.transport_failure(
                f"OpenRouter API call failed: {e}", raw_response=raw
            )

        choices = result.get("choices") or []
        if not choices:
            return CompletionOutcome.succeeded(None, None, result)

        choice = choices[0]
        message = choice.get("message") or {}
        return CompletionOutcome.succeeded(
            choice.get("finish_reason"), message.get("content"), result
        )

    def get_endpoint_info(self) -> dict:
        """Get information about the OpenRouter endpoint."""
        info = super().get_endpoint_info()
        info.update({"url": self.url, "referer": self.referer})
        info["api_key_set"] = bool(self.api_key)
        return info
