"""
Unit Tests for the OpenAI Provider

Request building and configuration checks; no network calls.
"""

import pytest

from senali.infrastructure.llm import (
    ProviderNotConfiguredError,
    clear_provider_cache,
    get_llm_provider,
)
from senali.infrastructure.llm.openai_provider import PLACEHOLDER_KEY, OpenAIProvider
from senali.services.prompt.prompt_builder import BuiltPrompt


@pytest.fixture
def provider():
    return OpenAIProvider(api_key="sk-test", model="gpt-test", max_tokens=300, temperature=0.5)


class TestBuildRequest:

    def test_provider_defaults(self, provider):
        request = provider.build_request(BuiltPrompt(system_prompt="Be kind", user_message="Hi"))

        assert request["model"] == "gpt-test"
        assert request["max_tokens"] == 300
        assert request["temperature"] == 0.5
        assert request["messages"][0] == {"role": "system", "content": "Be kind"}
        assert "response_format" not in request
        assert "presence_penalty" not in request

    def test_prompt_settings_override_defaults(self, provider):
        prompt = BuiltPrompt(
            system_prompt="s",
            max_tokens=800,
            temperature=0.0,
            presence_penalty=0.6,
            json_mode=True,
        )

        request = provider.build_request(prompt)

        assert request["max_tokens"] == 800
        assert request["temperature"] == 0.0
        assert request["presence_penalty"] == 0.6
        assert request["response_format"] == {"type": "json_object"}

    def test_arguments_override_prompt(self, provider):
        prompt = BuiltPrompt(system_prompt="s", temperature=0.9)

        request = provider.build_request(prompt, model="gpt-other", temperature=0.3)

        assert request["model"] == "gpt-other"
        assert request["temperature"] == 0.3


class TestConfiguration:

    def test_placeholder_key_is_not_configured(self):
        assert not OpenAIProvider(api_key=PLACEHOLDER_KEY).is_configured()

    def test_real_key_is_configured(self, provider):
        assert provider.is_configured()

    async def test_generate_without_key_fails_fast(self):
        unconfigured = OpenAIProvider(api_key=PLACEHOLDER_KEY)

        with pytest.raises(ProviderNotConfiguredError):
            await unconfigured.generate(BuiltPrompt(system_prompt="s", user_message="Hi"))


class TestProviderFactory:

    def test_cached_until_cleared(self):
        clear_provider_cache()
        first = get_llm_provider()

        assert get_llm_provider() is first
        clear_provider_cache()
        assert get_llm_provider() is not first
        clear_provider_cache()
