"""IETF datatracker proceedings-page session source.

Scrapes ``https://datatracker.ietf.org/meeting/<N>/proceedings`` for
"Session recording" links.  The working-group name is taken from the first
cell of the row holding the link, ignoring status badges.
"""

from __future__ import annotations

from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from auto_minutes.interfaces.item_source import IItemSource
from auto_minutes.models.item import Item
from auto_minutes.providers.source.meetecho_provider import fetch_html, session_id_from_url
from auto_minutes.utils.logging import get_logger

_PROCEEDINGS_URL = "https://datatracker.ietf.org/meeting/{collection_id}/proceedings"


class ProceedingsItemSource(IItemSource):
    """Session source backed by the datatracker proceedings page."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._logger = get_logger(__name__)

    async def list_items(self, collection_id: str) -> list[Item]:
        url = _PROCEEDINGS_URL.format(collection_id=collection_id)
        html = await fetch_html(self._http, url, self.get_provider_name())
        items = self.parse_proceedings(html, base_url=url)
        self._logger.info(
            "proceedings_sessions_listed", collection_id=collection_id, count=len(items)
        )
        return items

    def parse_proceedings(self, html: str, base_url: str = "") -> list[Item]:
        soup = BeautifulSoup(html, "html.parser")
        items: list[Item] = []

        for index, link in enumerate(soup.find_all("a")):
            href = link.get("href")
            text = link.get_text(strip=True).lower()
            if not href or "session recording" not in text:
                continue

            recording_url = urljoin(base_url, href)
            session_id = session_id_from_url(recording_url)
            if not session_id:
                self._logger.warning("proceedings_missing_session_id", url=recording_url)
                continue

            name = self._session_name(link) or f"Session {index + 1}"
            items.append(Item(item_id=session_id, display_name=name, external_ref=recording_url))

        return items

    @staticmethod
    def _session_name(link) -> str:
        row = link.find_parent("tr")
        if row is None:
            return ""
        first_cell = row.find("td")
        if first_cell is not None:
            anchor = first_cell.find("a")
            if anchor is not None and anchor.get_text(strip=True):
                return anchor.get_text(strip=True)
            for badge in first_cell.select(".badge"):
                badge.decompose()
            text = first_cell.get_text(strip=True)
            if text:
                return text
        # Fall back to the nearest heading row above.
        for previous in row.find_previous_siblings("tr"):
            heading = previous.find("th")
            if heading is not None and heading.get_text(strip=True):
                return heading.get_text(strip=True)
        return ""

    def get_provider_name(self) -> str:
        return "proceedings"
