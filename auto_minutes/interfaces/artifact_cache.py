"""Abstract base class for generated-artifact caches.

Defines the contract for storing one generated minutes artifact per
``(collection_id, item_id)``.  Implementations may use flat files, SQLite or
an in-memory dict; the adapter pattern allows the backend to be swapped
without touching the collect stage or the assembler.

The cache holds *raw* generator output, never rendered pages: changing how
minutes are laid out must never require calling the model again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable


class IArtifactCache(ABC):
    """Contract for the generated-artifact cache.

    All operations are async so network-backed stores (object storage, a
    remote key-value service) fit without blocking the event loop.
    """

    @abstractmethod
    async def exists(self, collection_id: str, item_id: str) -> bool:
        """Return ``True`` if an artifact is cached for the key.  No side effects."""

    @abstractmethod
    async def get(self, collection_id: str, item_id: str) -> str:
        """Return the cached artifact.

        Raises
        ------
        auto_minutes.utils.errors.ArtifactNotFoundError
            If nothing is cached for the key.
        """

    @abstractmethod
    async def get_many(self, collection_id: str, item_ids: Iterable[str]) -> dict[str, str]:
        """Batch read.  Keys that are not cached are omitted from the result."""

    @abstractmethod
    async def put(self, collection_id: str, item_id: str, content: str) -> None:
        """Store *content* under the key, overwriting any previous value.

        The cache does not enforce write-once; callers check :meth:`exists`
        first to avoid wasted generation.

        Raises
        ------
        auto_minutes.utils.errors.PersistenceError
            If the write could not be completed.
        """

    @abstractmethod
    async def list_keys(self, collection_id: str) -> set[str]:
        """Return every item id cached for *collection_id*."""

    @abstractmethod
    async def list_collections(self) -> list[str]:
        """Return every collection with at least one cached artifact.

        Sorted ascending, numerically for numeric ids (``3, 12, 101``).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this backend, e.g. ``"file"``."""
