"""Unit tests for LLM provider adapters -- Anthropic, OpenAI, Gemini."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from auto_minutes.config.settings import Settings
from auto_minutes.utils.errors import ConfigurationError, LLMError

# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    defaults = {
        "anthropic_api_key": "test-anthropic",
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "gemini_api_key": "test-gemini",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def _openai_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(total_tokens=100)
    return response


# ======================================================================
# Anthropic
# ======================================================================


class TestAnthropicLLMProvider:
    def test_availability_follows_key(self) -> None:
        from auto_minutes.providers.llm.anthropic_provider import AnthropicLLMProvider

        assert AnthropicLLMProvider(_settings()).is_available() is True
        assert AnthropicLLMProvider(_settings(anthropic_api_key="")).is_available() is False
        assert AnthropicLLMProvider(_settings()).get_provider_name() == "anthropic"

    @pytest.mark.asyncio
    async def test_complete_joins_text_blocks(self) -> None:
        from auto_minutes.providers.llm.anthropic_provider import AnthropicLLMProvider

        mock_response = MagicMock()
        mock_response.content = [
            MagicMock(type="text", text="# TLS"),
            MagicMock(type="tool_use", text="ignored"),
            MagicMock(type="text", text="## Summary"),
        ]
        mock_response.usage = MagicMock(input_tokens=10, output_tokens=20)
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        with patch(
            "auto_minutes.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(_settings())
            result = await provider.complete("system", "user", max_tokens=4096)

        assert result == "# TLS\n## Summary"
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-sonnet-4-20250514"
        assert kwargs["system"] == "system"
        assert kwargs["max_tokens"] == 4096

    @pytest.mark.asyncio
    async def test_complete_without_text_raises(self) -> None:
        from auto_minutes.providers.llm.anthropic_provider import AnthropicLLMProvider

        mock_response = MagicMock()
        mock_response.content = []
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        with patch(
            "auto_minutes.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(_settings())
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_api_error_becomes_llm_error(self) -> None:
        import anthropic

        from auto_minutes.providers.llm.anthropic_provider import AnthropicLLMProvider

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(
            side_effect=anthropic.APIError(message="overloaded", request=MagicMock(), body=None)
        )

        with patch(
            "auto_minutes.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(_settings())
            with pytest.raises(LLMError) as exc_info:
                await provider.complete("system", "user")

        assert exc_info.value.provider_name == "anthropic"


# ======================================================================
# OpenAI
# ======================================================================


class TestOpenAILLMProvider:
    @pytest.mark.asyncio
    async def test_complete_success(self) -> None:
        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_openai_response("minutes"))

        with patch(
            "auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ) as mock_cls:
            provider = OpenAILLMProvider(_settings())
            result = await provider.complete("system prompt", "user prompt")

        assert result == "minutes"
        assert "base_url" not in mock_cls.call_args.kwargs
        messages = mock_client.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "system prompt"}

    @pytest.mark.asyncio
    async def test_empty_content_raises(self) -> None:
        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_openai_response(None))

        with patch(
            "auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(_settings())
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_api_error_becomes_llm_error(self) -> None:
        import openai

        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIError(message="Rate limit", request=MagicMock(), body=None)
        )

        with patch(
            "auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(_settings())
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    def test_custom_base_url_is_passed(self) -> None:
        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        with patch("auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI") as mock_cls:
            OpenAILLMProvider(_settings(openai_base_url="http://localhost:8080/v1"))

        assert mock_cls.call_args.kwargs["base_url"] == "http://localhost:8080/v1"

    @pytest.mark.asyncio
    async def test_unconfigured_provider_builds_no_client(self) -> None:
        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        with patch("auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI") as mock_cls:
            provider = OpenAILLMProvider(_settings(openai_api_key=""))

        mock_cls.assert_not_called()
        assert provider.is_available() is False
        with pytest.raises(LLMError, match="not configured"):
            await provider.complete("system", "user")


# ======================================================================
# Gemini
# ======================================================================


class TestGeminiLLMProvider:
    def test_uses_gemini_endpoint_key_and_model(self) -> None:
        from auto_minutes.providers.llm.gemini_provider import GeminiLLMProvider

        with patch("auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI") as mock_cls:
            provider = GeminiLLMProvider(_settings())

        kwargs = mock_cls.call_args.kwargs
        assert kwargs["api_key"] == "test-gemini"
        assert kwargs["base_url"].startswith("https://generativelanguage.googleapis.com/")
        assert provider.get_provider_name() == "gemini"

    def test_two_backends_do_not_share_a_client(self) -> None:
        from auto_minutes.providers.llm.gemini_provider import GeminiLLMProvider
        from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider

        with patch("auto_minutes.providers.llm.openai_provider.openai.AsyncOpenAI") as mock_cls:
            mock_cls.side_effect = lambda **kwargs: MagicMock(name=kwargs["api_key"])
            gemini = GeminiLLMProvider(_settings())
            openai_provider = OpenAILLMProvider(_settings())

        assert gemini._client is not openai_provider._client


# ======================================================================
# build_llm_provider
# ======================================================================


class TestBuildLLMProvider:
    @pytest.mark.parametrize(
        ("backend", "expected"),
        [("claude", "anthropic"), ("openai", "openai"), ("gemini", "gemini")],
    )
    def test_selects_backend(self, backend: str, expected: str) -> None:
        from auto_minutes.providers.llm import build_llm_provider

        assert build_llm_provider(_settings(), backend).get_provider_name() == expected

    def test_defaults_to_settings_backend(self) -> None:
        from auto_minutes.providers.llm import build_llm_provider

        provider = build_llm_provider(_settings(llm_backend="gemini"))
        assert provider.get_provider_name() == "gemini"

    @pytest.mark.parametrize(
        ("backend", "key_field"),
        [
            ("claude", "anthropic_api_key"),
            ("openai", "openai_api_key"),
            ("gemini", "gemini_api_key"),
        ],
    )
    def test_missing_key_is_configuration_error(self, backend: str, key_field: str) -> None:
        from auto_minutes.providers.llm import build_llm_provider

        with pytest.raises(ConfigurationError, match=key_field.upper()):
            build_llm_provider(_settings(**{key_field: ""}), backend)

    def test_unknown_backend(self) -> None:
        from auto_minutes.providers.llm import build_llm_provider

        with pytest.raises(ConfigurationError):
            build_llm_provider(_settings(), "llama")
