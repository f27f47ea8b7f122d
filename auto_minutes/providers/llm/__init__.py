"""LLM provider adapters.

Three concrete implementations of ILLMProvider (auto_minutes/interfaces/llm_provider.py):
    - AnthropicLLMProvider -- Claude Sonnet (``--model claude``, the default)
    - OpenAILLMProvider    -- gpt-4o-mini or any OpenAI-compatible API
    - GeminiLLMProvider    -- Gemini via Google's OpenAI-compatible endpoint

``build_llm_provider`` maps the configured backend name to an instance; the
choice is an explicit value passed in by the caller, never global state.
"""

from auto_minutes.config.settings import Settings
from auto_minutes.interfaces.llm_provider import ILLMProvider
from auto_minutes.providers.llm.anthropic_provider import AnthropicLLMProvider
from auto_minutes.providers.llm.gemini_provider import GeminiLLMProvider
from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider
from auto_minutes.utils.errors import ConfigurationError

# backend name -> (provider class, Settings field holding its API key)
_BACKENDS = {
    "claude": (AnthropicLLMProvider, "anthropic_api_key"),
    "openai": (OpenAILLMProvider, "openai_api_key"),
    "gemini": (GeminiLLMProvider, "gemini_api_key"),
}


def build_llm_provider(settings: Settings, backend: str | None = None) -> ILLMProvider:
    """Create the LLM provider for *backend* (defaults to ``settings.llm_backend``).

    Raises
    ------
    ConfigurationError
        If the backend name is unknown or its API key is not configured.
    """
    name = backend or settings.llm_backend
    try:
        provider_cls, key_field = _BACKENDS[name]
    except KeyError as exc:
        raise ConfigurationError(
            message=f"Unknown LLM backend {name!r}; choose one of {', '.join(_BACKENDS)}"
        ) from exc

    # Checked before construction: SDK clients may refuse an empty key.
    if not getattr(settings, key_field):
        raise ConfigurationError(
            message=(
                f"{key_field.upper()} not found in environment; "
                "create a .env file with your API key"
            ),
            provider_name=name,
        )
    return provider_cls(settings)


__all__ = [
    "AnthropicLLMProvider",
    "GeminiLLMProvider",
    "OpenAILLMProvider",
    "build_llm_provider",
]
