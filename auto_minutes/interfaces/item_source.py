"""Abstract base classes for session discovery and transcript download."""

from __future__ import annotations

from abc import ABC, abstractmethod

from auto_minutes.models.item import Item


class IItemSource(ABC):
    """Contract for listing the recorded sessions of one meeting.

    Concrete implementations: MeetechoItemSource, ProceedingsItemSource,
    and the ValidatingItemSource wrapper (in auto_minutes/providers/source/).
    """

    @abstractmethod
    async def list_items(self, collection_id: str) -> list[Item]:
        """Return every recorded session of meeting *collection_id*.

        Raises
        ------
        auto_minutes.utils.errors.SourceError
            If the listing page cannot be fetched.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this source, e.g. ``"meetecho"``."""


class ITranscriptFetcher(ABC):
    """Contract for downloading the raw transcript of one session."""

    @abstractmethod
    async def fetch(self, item_id: str) -> str:
        """Return the raw transcript text for *item_id*.

        Raises
        ------
        auto_minutes.utils.errors.UnavailableError
            On any non-success condition (network error, missing
            transcript, empty body).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this fetcher."""
