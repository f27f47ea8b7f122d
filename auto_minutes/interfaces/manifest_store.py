"""Abstract base class for group-manifest stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from auto_minutes.models.item import GroupManifest


class IManifestStore(ABC):
    """Contract for persisting one :class:`GroupManifest` per collection.

    ``save`` replaces the whole manifest atomically: a reader never sees a
    torn or half-written manifest, and a failed save leaves the previous
    manifest in place.  Groups and members are stored in the order given.
    """

    @abstractmethod
    async def save(self, collection_id: str, manifest: GroupManifest) -> None:
        """Atomically replace the manifest for *collection_id*.

        Raises
        ------
        auto_minutes.utils.errors.PersistenceError
            If the manifest could not be written.
        """

    @abstractmethod
    async def load(self, collection_id: str) -> GroupManifest:
        """Return the stored manifest.

        Raises
        ------
        auto_minutes.utils.errors.ManifestMissingError
            If no manifest was ever saved for *collection_id*.
        auto_minutes.utils.errors.PersistenceError
            If a manifest exists but cannot be parsed.
        """

    @abstractmethod
    async def exists(self, collection_id: str) -> bool:
        """Return ``True`` if a manifest has been saved for *collection_id*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this backend, e.g. ``"file"``."""
