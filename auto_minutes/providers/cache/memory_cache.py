"""In-memory artifact cache.

Simple, fast cache suitable for tests and dry runs.  Nothing survives the
process, so it is never selected by the CLI.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.utils.errors import ArtifactNotFoundError
from auto_minutes.utils.text_normalizer import sort_collection_ids

logger = structlog.get_logger(logger_name=__name__)


class MemoryArtifactCache(IArtifactCache):
    """Dict-of-dicts artifact cache: ``{collection_id: {item_id: content}}``."""

    def __init__(self) -> None:
        self._store: dict[str, dict[str, str]] = {}

    # ------------------------------------------------------------------
    # IArtifactCache implementation
    # ------------------------------------------------------------------

    async def exists(self, collection_id: str, item_id: str) -> bool:
        return item_id in self._store.get(str(collection_id), {})

    async def get(self, collection_id: str, item_id: str) -> str:
        try:
            value = self._store[str(collection_id)][item_id]
        except KeyError as exc:
            logger.debug("cache_miss", collection_id=collection_id, item_id=item_id)
            raise ArtifactNotFoundError(
                message=f"No cached artifact for {collection_id}/{item_id}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("cache_hit", collection_id=collection_id, item_id=item_id)
        return value

    async def get_many(self, collection_id: str, item_ids: Iterable[str]) -> dict[str, str]:
        bucket = self._store.get(str(collection_id), {})
        return {item_id: bucket[item_id] for item_id in item_ids if item_id in bucket}

    async def put(self, collection_id: str, item_id: str, content: str) -> None:
        self._store.setdefault(str(collection_id), {})[item_id] = content
        logger.debug("cache_set", collection_id=collection_id, item_id=item_id)

    async def list_keys(self, collection_id: str) -> set[str]:
        return set(self._store.get(str(collection_id), {}))

    async def list_collections(self) -> list[str]:
        return sort_collection_ids(cid for cid, bucket in self._store.items() if bucket)

    def get_provider_name(self) -> str:
        return "memory"
