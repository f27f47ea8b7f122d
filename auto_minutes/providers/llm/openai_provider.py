"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.  When a
custom base URL is configured the client points at that URL instead of the
default OpenAI endpoint, so the same adapter serves any OpenAI-compatible
API.  :class:`GeminiLLMProvider` reuses it for Google's Gemini endpoint.
"""

from __future__ import annotations

import openai
import structlog

from auto_minutes.config.settings import Settings
from auto_minutes.interfaces.llm_provider import ILLMProvider
from auto_minutes.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_REQUEST_TIMEOUT = openai.Timeout(600.0, connect=10.0)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat completions API.

    The rest of the application never imports or calls ``openai`` directly.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        provider_name: str = "openai",
    ) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key if api_key is None else api_key
        base_url = settings.openai_base_url if base_url is None else base_url

        client_kwargs: dict = {
            "api_key": self._api_key,
            "timeout": _REQUEST_TIMEOUT,
        }
        if base_url:
            client_kwargs["base_url"] = base_url
        # The SDK rejects an empty key, so an unconfigured provider has no client.
        self._client = openai.AsyncOpenAI(**client_kwargs) if self._api_key else None
        self._model = model or settings.openai_model
        self._provider_name = provider_name

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ) -> str:
        """Generate a text completion via the chat completions API."""
        if self._client is None:
            raise LLMError(
                message=f"{self._provider_name} API key is not configured",
                provider_name=self.get_provider_name(),
            )
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_name} request timed out",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_name} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMError(
                message=f"{self._provider_name} returned empty response",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "openai_completion",
            model=self._model,
            provider=self._provider_name,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content

    def is_available(self) -> bool:
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return self._provider_name
