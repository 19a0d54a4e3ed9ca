"""
LLM Provider Interface

Services depend on LLMProvider, never on a vendor SDK. The OpenAI
implementation lives in openai_provider; tests plug in a scripted one.

Error types map to HTTP responses in the API layer:
    ProviderNotConfiguredError -> 503
    RateLimitError             -> 429
    ContentFilterError         -> 422
    LLMProviderError           -> 502
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from senali.services.prompt.prompt_builder import BuiltPrompt


@dataclass
class LLMResponse:
    """
    One completion.

    Attributes:
        content: Generated text (may be empty)
        finish_reason: Why generation stopped
        usage: prompt_tokens, completion_tokens, total_tokens
        model: Model that answered
        provider: Provider name
        latency_ms: Round trip of the successful attempt
    """

    content: str
    finish_reason: str = "stop"
    usage: dict[str, int] = field(default_factory=dict)
    model: str = ""
    provider: str = ""
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        return self.usage.get("total_tokens", 0)

    @property
    def is_empty(self) -> bool:
        """True when the model produced no usable text."""
        return not self.content or not self.content.strip()


class LLMProvider(ABC):
    """A chat-completion backend."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Name used in logs and metrics."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when the caller does not pick one."""

    @abstractmethod
    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Complete a prompt. Explicit arguments win over the prompt's own
        settings, which win over the provider defaults.

        Raises:
            LLMProviderError: Any provider failure
        """

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present. Does not call the provider."""


class LLMProviderError(Exception):
    """Provider call failed."""

    def __init__(
        self,
        message: str,
        provider: str,
        is_retryable: bool = False,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.is_retryable = is_retryable
        self.original_error = original_error


class ProviderNotConfiguredError(LLMProviderError):
    """No API key; the AI features are unavailable."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider} API key not configured", provider=provider)


class RateLimitError(LLMProviderError):
    """Provider rate limit; retried before it reaches the caller."""

    def __init__(self, provider: str, retry_after_seconds: Optional[int] = None) -> None:
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            is_retryable=True,
        )
        self.retry_after_seconds = retry_after_seconds


class ContentFilterError(LLMProviderError):
    """The provider's safety system withheld the output."""

    def __init__(self, provider: str, filter_reason: str = "") -> None:
        super().__init__(f"Content filtered by {provider}: {filter_reason}", provider=provider)
        self.filter_reason = filter_reason


def is_retryable_error(error: BaseException) -> bool:
    """tenacity predicate: only transient provider failures."""
    return isinstance(error, LLMProviderError) and error.is_retryable
