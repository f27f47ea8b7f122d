"""Meetecho transcript fetcher.

Downloads ``https://meetecho-player.ietf.org/playout/transcripts/<session id>``.
The body is the transcript as JSON (timestamped text segments); it is passed
to the generator verbatim.
"""

from __future__ import annotations

import httpx

from auto_minutes.interfaces.item_source import ITranscriptFetcher
from auto_minutes.utils.errors import UnavailableError
from auto_minutes.utils.logging import get_logger

_TRANSCRIPT_URL = "https://meetecho-player.ietf.org/playout/transcripts/{item_id}"


class MeetechoTranscriptFetcher(ITranscriptFetcher):
    """Fetches raw transcripts from the Meetecho player.

    Every failure (HTTP error status, network error, empty body) surfaces as
    :class:`UnavailableError`; many sessions simply have no transcript.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def fetch(self, item_id: str) -> str:
        url = _TRANSCRIPT_URL.format(item_id=item_id)
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UnavailableError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise UnavailableError(
                message=f"Could not fetch {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text = response.text
        if not text.strip():
            raise UnavailableError(
                message=f"Empty transcript for {item_id}",
                provider_name=self.get_provider_name(),
            )

        self._logger.debug("transcript_downloaded", item_id=item_id, length=len(text))
        return text

    def get_provider_name(self) -> str:
        return "meetecho"
