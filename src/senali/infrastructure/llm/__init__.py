"""LLM provider infrastructure."""

from senali.infrastructure.llm.provider import (
    LLMProvider,
    LLMResponse,
    LLMProviderError,
    ProviderNotConfiguredError,
    RateLimitError,
    ContentFilterError,
)
from senali.infrastructure.llm.provider_factory import (
    get_llm_provider,
    clear_provider_cache,
)

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMProviderError",
    "ProviderNotConfiguredError",
    "RateLimitError",
    "ContentFilterError",
    "get_llm_provider",
    "clear_provider_cache",
]
