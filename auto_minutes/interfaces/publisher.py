"""Abstract base class for the render/publish step fed by the assembler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class IPublisher(ABC):
    """Contract for turning assembled minutes into a published document set.

    The assembler decides *what* is published and in which order; the
    publisher only decides how it looks on disk.
    """

    @abstractmethod
    async def publish_group(
        self,
        collection_id: str,
        display_name: str,
        combined_text: str,
        external_refs: Sequence[str],
    ) -> None:
        """Publish the combined minutes of one group.

        Raises
        ------
        auto_minutes.utils.errors.PublishError
            If the page cannot be written.
        """

    @abstractmethod
    async def publish_collection_index(
        self, collection_id: str, display_names: Sequence[str]
    ) -> None:
        """Publish the index of one collection; names arrive already sorted."""

    @abstractmethod
    async def publish_root_index(self, collection_ids: Sequence[str]) -> None:
        """Publish the root index; ids arrive already sorted."""
