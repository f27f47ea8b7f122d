"""Abstract base class for LLM service providers.

Defines the contract for the large-language-model backend that turns a
transcript into minutes.  Implementations wrap the Anthropic API (Claude),
OpenAI, or Gemini through its OpenAI-compatible endpoint.  The adapter
pattern keeps the minutes generator provider-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: AnthropicLLMProvider, OpenAILLMProvider, GeminiLLMProvider
# Located in: auto_minutes/providers/llm/
class ILLMProvider(ABC):
    """Contract for LLM services used by the minutes generator."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user-facing prompt containing the actual request or data.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        auto_minutes.utils.errors.LLMError
            If the API call fails or returns an invalid response.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider.

        Example return values: ``"anthropic"``, ``"openai"``, ``"gemini"``.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations should verify that credentials are present without
        making an inference call.
        """
