"""Minutes generation service.

Turns one raw session transcript into Markdown meeting minutes through an
injected :class:`ILLMProvider`.  The service owns the prompt; the provider
owns the wire protocol.  Which provider is used is decided by the caller
(see :func:`auto_minutes.providers.llm.build_llm_provider`), so several
generators with different backends can coexist in one process.
"""

from __future__ import annotations

import structlog

from auto_minutes.interfaces.llm_provider import ILLMProvider
from auto_minutes.utils.errors import GenerationError, LLMError
from auto_minutes.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


class MinutesGenerator:
    """Generates structured meeting minutes from a session transcript.

    Parameters
    ----------
    llm_provider:
        The LLM backend used for the completion call.
    max_tokens:
        Upper bound on the length of the generated minutes.
    temperature:
        Sampling temperature; low values keep the minutes factual.
    """

    _SYSTEM_PROMPT = (
        "You are an expert technical writer for the IETF. You convert raw "
        "meeting transcripts into accurate, well-structured meeting minutes "
        "in Markdown. You never invent decisions or participants that do not "
        "appear in the transcript."
    )

    _USER_PROMPT_TEMPLATE = """Convert the following meeting transcript into well-structured meeting minutes in Markdown format.

Session: {display_name}

Requirements:
- Start with a # header with the session name
- Include a ## Summary section with a brief overview
- Include a ## Key Discussion Points section with bullet points
- Include a ## Decisions and Action Items section if applicable
- Include a ## Next Steps section if applicable
- Be concise but capture all important technical discussions
- Use proper Markdown formatting
- Focus on technical content and decisions

The transcript is in JSON format with timestamps and text. Here is the transcript:

{content}

Generate the meeting minutes:"""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        max_tokens: int = 4096,
        temperature: float = 0.3,
    ) -> None:
        self._llm = llm_provider
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def provider_name(self) -> str:
        return self._llm.get_provider_name()

    def build_prompt(self, content: str, display_name: str) -> str:
        """Return the user prompt for one transcript."""
        return self._USER_PROMPT_TEMPLATE.format(display_name=display_name, content=content)

    async def generate(self, content: str, display_name: str) -> str:
        """Generate minutes for one session transcript.

        Parameters
        ----------
        content:
            The raw transcript text.
        display_name:
            The session name, used as the minutes title.

        Returns
        -------
        str
            The generated Markdown minutes, stripped of surrounding
            whitespace.

        Raises
        ------
        GenerationError
            If the provider fails or returns an empty completion.
        """
        try:
            minutes = await self._llm.complete(
                system_prompt=self._SYSTEM_PROMPT,
                user_prompt=self.build_prompt(content, display_name),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as exc:
            raise GenerationError(
                message=f"Minutes generation failed for {display_name}: {exc.message}",
                provider_name=self.provider_name,
            ) from exc

        minutes = (minutes or "").strip()
        if not minutes:
            raise GenerationError(
                message=f"Empty minutes returned for {display_name}",
                provider_name=self.provider_name,
            )

        logger.debug(
            "minutes_generated",
            display_name=display_name,
            provider=self.provider_name,
            length=len(minutes),
        )
        return minutes
