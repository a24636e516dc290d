"""
Base completion strategy interface.

Defines the abstract base class for all completion strategies that send one
system instruction and one user message to a chat-completion service and
return a CompletionOutcome. Transport failures never raise out of a strategy;
they come back as a failed outcome so the caller decides how to react.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

DEFAULT_JSON_ROLE = "You are a helpful assistant designed to output JSON."
DEFAULT_ROLE = "You are a helpful assistant."


@dataclass
class CompletionOutcome:
    """Result of one request to the completion service."""

    success: bool
    finish_reason: Optional[str] = None
    content: Optional[str] = None
    raw_response: Any = None
    error: Optional[str] = None

    def __post_init__(self):
        """Validate the outcome after initialization."""
        if not self.success and self.error is None:
            raise ValueError("Failed outcome must have error message")

    @classmethod
    def succeeded(
        cls, finish_reason: Optional[str], content: Optional[str], raw_response: Any
    ) -> "CompletionOutcome":
        """The service answered; finish_reason and content are still unchecked."""
        return cls(
            success=True,
            finish_reason=finish_reason,
            content=content,
            raw_response=raw_response,
        )

    @classmethod
    def transport_failure(
        cls, error: str, raw_response: Any = None
    ) -> "CompletionOutcome":
        """The service could not be reached or did not answer in time."""
        return cls(success=False, error=error, raw_response=raw_response)


class BaseCompletionStrategy(ABC):
    """Abstract base class for all completion strategies."""

    provider = "base"

    def __init__(
        self,
        model: str,
        seed: Optional[int] = None,
        timeout: Optional[float] = None,
        json_out: bool = True,
        **kwargs,
    ):
        """
        Initialize the completion strategy.

        Args:
            model: The model identifier to use for this strategy
            seed: Optional seed for reduced run-to-run variance
            timeout: Request timeout in seconds
            json_out: Request a json object reply
            **kwargs: Additional strategy-specific configuration
        """
        self.model = model
        self.seed = seed
        self.timeout = timeout
        self.json_out = json_out
        self.config = kwargs

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> CompletionOutcome:
        """
        Send one request to the completion service.

        Args:
            system_prompt: The role instruction
            user_prompt: The assembled user message

        Returns:
            CompletionOutcome with the finish reason, content and raw response
        """
        pass

    def build_messages(
        self, system_prompt: Optional[str], user_prompt: str
    ) -> List[Dict[str, str]]:
        """Exactly one system message followed by one user message."""
        if not system_prompt:
            system_prompt = DEFAULT_JSON_ROLE if self.json_out else DEFAULT_ROLE
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    def build_request(
        self, system_prompt: Optional[str], user_prompt: str
    ) -> Dict[str, Any]:
        """Request body shared by all OpenAI-compatible chat endpoints."""
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(system_prompt, user_prompt),
        }
        if self.json_out:
            request["response_format"] = {"type": "json_object"}
        if self.seed is not None:
            request["seed"] = self.seed
        return request

    def get_config_value(self, key: str, default=None):
        """Get a configuration value with optional default."""
        return self.config.get(key, default)

    def get_endpoint_info(self) -> dict:
        """Get information about the configured endpoint."""
        return {
            "provider": self.provider,
            "model": self.model,
            "seed": self.seed,
            "timeout": self.timeout,
            "json_out": self.json_out,
        }

    def __str__(self) -> str:
        """String representation of the strategy."""
        return f"{self.__class__.__name__}(model={self.model})"

    def __repr__(self) -> str:
        """Developer representation of the strategy."""
        return f"{self.__class__.__name__}(model='{self.model}', seed={self.seed}, config={self.config})"
