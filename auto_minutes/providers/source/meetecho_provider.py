"""Meetecho recordings-page session source.

Scrapes ``https://www.meetecho.com/ietf<N>/recordings/`` for the sessions of
one IETF meeting.  Each row of ``#recsTable`` holds the session name, the
local date/time and a link to the Meetecho player whose ``session`` query
parameter is the session id, e.g.
``https://meetecho-player.ietf.org/playout/?session=IETF123-6LO-20250723-0730``.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import httpx
from bs4 import BeautifulSoup

from auto_minutes.interfaces.item_source import IItemSource
from auto_minutes.models.item import Item
from auto_minutes.utils.errors import SourceError
from auto_minutes.utils.logging import get_logger

_RECORDINGS_URL = "https://www.meetecho.com/ietf{collection_id}/recordings/"


def session_id_from_url(url: str) -> str | None:
    """Return the ``session`` query parameter of a Meetecho player URL."""
    try:
        values = parse_qs(urlparse(url).query).get("session")
    except ValueError:
        return None
    return values[0] if values else None


async def fetch_html(client: httpx.AsyncClient, url: str, provider_name: str) -> str:
    """GET *url* and return the body, wrapping any failure in :class:`SourceError`."""
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceError(
            message=f"Failed to fetch {url}: HTTP {exc.response.status_code}",
            provider_name=provider_name,
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceError(
            message=f"Failed to fetch {url}: {exc}",
            provider_name=provider_name,
        ) from exc
    return response.text


class MeetechoItemSource(IItemSource):
    """Session source backed by the Meetecho recordings table.

    The ``httpx.AsyncClient`` is injected for testability.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def list_items(self, collection_id: str) -> list[Item]:
        url = _RECORDINGS_URL.format(collection_id=collection_id)
        html = await fetch_html(self._http, url, self.get_provider_name())
        items = self.parse_recordings(html)
        self._logger.info(
            "meetecho_sessions_listed", collection_id=collection_id, count=len(items)
        )
        return items

    def parse_recordings(self, html: str) -> list[Item]:
        """Parse the ``#recsTable`` rows of a recordings page into items."""
        soup = BeautifulSoup(html, "html.parser")
        items: list[Item] = []

        for row in soup.select("#recsTable tr"):
            cells = row.find_all("td")
            # Header rows use <th>; anything short is layout noise.
            if len(cells) < 3:
                continue

            name = cells[0].get_text(strip=True)
            link = cells[2].find("a")
            recording_url = link.get("href") if link else None
            if not name or not recording_url:
                continue

            session_id = session_id_from_url(recording_url)
            if not session_id:
                self._logger.warning("meetecho_missing_session_id", url=recording_url)
                continue

            items.append(Item(item_id=session_id, display_name=name, external_ref=recording_url))

        return items

    def get_provider_name(self) -> str:
        return "meetecho"
