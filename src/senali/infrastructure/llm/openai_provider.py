"""
OpenAI Chat Completions provider.

SDK exceptions are translated into the provider error types; transient
ones (rate limits, timeouts, 5xx) are retried with backoff by tenacity.
The SDK's own retry loop is disabled so attempts are counted once.
"""

import time
from typing import Any, Optional

from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError as OpenAIRateLimitError,
)
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from senali.config import get_settings
from senali.config.logging_config import get_logger
from senali.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    ProviderNotConfiguredError,
    RateLimitError,
    is_retryable_error,
)
from senali.infrastructure.metrics.prometheus_metrics import track_llm_request
from senali.services.prompt.prompt_builder import BuiltPrompt

logger = get_logger(__name__)

PLACEHOLDER_KEY = "sk-CHANGE_ME"
RATE_LIMIT_BACKOFF_SECONDS = 60


def _usage_dict(usage: Any) -> dict[str, int]:
    if usage is None:
        return {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}
    return {
        "prompt_tokens": usage.prompt_tokens or 0,
        "completion_tokens": usage.completion_tokens or 0,
        "total_tokens": usage.total_tokens or 0,
    }


def _first_set(*values: Optional[Any]) -> Any:
    return next(v for v in values if v is not None)


class OpenAIProvider(LLMProvider):
    """
    Talks to OpenAI through AsyncOpenAI.

    Constructor arguments override the SENALI_OPENAI_* settings; tests
    use them to point at a fixed model.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> None:
        config = get_settings().openai
        self._api_key = api_key or config.api_key.get_secret_value()
        self._model = model or config.model
        self._max_tokens = max_tokens or config.max_tokens
        self._temperature = _first_set(temperature, config.temperature)
        self._timeout = config.timeout_seconds
        self._client: Optional[AsyncOpenAI] = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key != PLACEHOLDER_KEY

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    def build_request(
        self,
        prompt: BuiltPrompt,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> dict[str, Any]:
        """Keyword arguments for chat.completions.create."""
        request: dict[str, Any] = {
            "model": model or self._model,
            "messages": prompt.to_messages(),
            "max_tokens": max_tokens or prompt.max_tokens or self._max_tokens,
            "temperature": _first_set(temperature, prompt.temperature, self._temperature),
        }
        if prompt.presence_penalty:
            request["presence_penalty"] = prompt.presence_penalty
        if prompt.frequency_penalty:
            request["frequency_penalty"] = prompt.frequency_penalty
        if prompt.json_mode:
            request["response_format"] = {"type": "json_object"}
        return request

    def _translate(self, error: Exception) -> LLMProviderError:
        if isinstance(error, OpenAIRateLimitError):
            logger.warning("OpenAI rate limited", error=str(error))
            return RateLimitError(self.provider_name, RATE_LIMIT_BACKOFF_SECONDS)

        if isinstance(error, (APITimeoutError, APIConnectionError)):
            logger.warning("OpenAI unreachable", error=str(error))
            return LLMProviderError(
                "OpenAI connection error",
                provider=self.provider_name,
                is_retryable=True,
                original_error=error,
            )

        status_code = getattr(error, "status_code", None)
        logger.error("OpenAI request failed", error=str(error), status_code=status_code)
        return LLMProviderError(
            f"OpenAI API error: {error}",
            provider=self.provider_name,
            is_retryable=status_code is None or status_code >= 500,
            original_error=error,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(is_retryable_error),
        reraise=True,
    )
    @track_llm_request("openai")
    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        if not self.is_configured():
            raise ProviderNotConfiguredError(self.provider_name)

        request = self.build_request(prompt, model, max_tokens, temperature)
        started = time.perf_counter()
        try:
            completion = await self.client.chat.completions.create(**request)
        except APIError as e:
            raise self._translate(e) from e
        latency_ms = int((time.perf_counter() - started) * 1000)

        answered_by = completion.model or request["model"]
        if not completion.choices:
            return LLMResponse(
                content="",
                model=answered_by,
                provider=self.provider_name,
                latency_ms=latency_ms,
            )

        choice = completion.choices[0]
        if choice.finish_reason == "content_filter":
            raise ContentFilterError(
                self.provider_name,
                "Content was filtered by OpenAI safety systems",
            )

        usage = _usage_dict(completion.usage)
        logger.debug(
            "OpenAI completion",
            model=answered_by,
            tokens=usage["total_tokens"],
            latency_ms=latency_ms,
            json_mode=prompt.json_mode,
        )
        return LLMResponse(
            content=choice.message.content or "",
            finish_reason=choice.finish_reason or "stop",
            usage=usage,
            model=answered_by,
            provider=self.provider_name,
            latency_ms=latency_ms,
        )
