"""Gemini LLM provider adapter.

Google exposes Gemini through an OpenAI-compatible ``/v1beta/openai/``
endpoint, so this adapter is the OpenAI adapter pointed at that URL with the
Gemini key and model.  Every instance owns its own client; there is no
module-level ``configure()`` call to get out of order.
"""

from __future__ import annotations

from auto_minutes.config.settings import Settings
from auto_minutes.providers.llm.openai_provider import OpenAILLMProvider


class GeminiLLMProvider(OpenAILLMProvider):
    """LLM provider backed by Google Gemini (``gemini-2.0-flash`` by default)."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(
            settings,
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            model=settings.gemini_model,
            provider_name="gemini",
        )
