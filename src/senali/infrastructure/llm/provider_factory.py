"""
LLM Provider Factory

The process-wide OpenAI provider. Endpoints receive it through the
`get_llm` dependency, which tests override with a scripted provider.
"""

from functools import lru_cache

from senali.config.logging_config import get_logger
from senali.infrastructure.llm.openai_provider import OpenAIProvider
from senali.infrastructure.llm.provider import LLMProvider

logger = get_logger(__name__)


@lru_cache()
def get_llm_provider() -> LLMProvider:
    """
    Build the provider on first use and reuse it afterwards.

    A missing API key does not fail here; calls raise
    ProviderNotConfiguredError and readiness reports the gap.
    """
    provider = OpenAIProvider()
    logger.info(
        "LLM provider initialized",
        provider=provider.provider_name,
        model=provider.default_model,
        configured=provider.is_configured(),
    )
    return provider


def clear_provider_cache() -> None:
    """Forget the cached provider so the next call rereads settings."""
    get_llm_provider.cache_clear()
