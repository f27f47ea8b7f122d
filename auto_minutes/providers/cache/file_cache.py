"""Flat-file artifact cache.

Layout::

    <cache_dir>/
        123/
            IETF123-6LO-20250723-0730.md    <- raw generator output
            IETF123-TLS-20250722-0930.md
            manifest.json                   <- written by JSONManifestStore

One Markdown file per session, named after the session id so the cache can
be inspected (and selectively deleted to force regeneration) by hand.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Iterable
from pathlib import Path

import structlog

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.utils.atomic_io import atomic_write_text
from auto_minutes.utils.errors import ArtifactNotFoundError, PersistenceError
from auto_minutes.utils.text_normalizer import sort_collection_ids

logger = structlog.get_logger(logger_name=__name__)

_ARTIFACT_SUFFIX = ".md"
# Keys become file and directory names; anything that could escape the
# cache directory or collide with temp files is refused.
_SAFE_KEY = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*$")


def validate_key(key: str, kind: str) -> str:
    """Return *key* unchanged, or raise ``ValueError`` if it is not a safe file name."""
    if not isinstance(key, str) or not _SAFE_KEY.match(key):
        raise ValueError(f"Unsafe {kind} for file storage: {key!r}")
    return key


class FileArtifactCache(IArtifactCache):
    """Artifact cache backed by one Markdown file per session.

    Parameters
    ----------
    cache_dir:
        Root directory; one sub-directory per collection.
    """

    def __init__(self, cache_dir: str | Path = "cache") -> None:
        self._root = Path(cache_dir)

    def collection_dir(self, collection_id: str) -> Path:
        return self._root / validate_key(str(collection_id), "collection id")

    def _artifact_path(self, collection_id: str, item_id: str) -> Path:
        validate_key(item_id, "item id")
        return self.collection_dir(collection_id) / f"{item_id}{_ARTIFACT_SUFFIX}"

    # ------------------------------------------------------------------
    # IArtifactCache implementation
    # ------------------------------------------------------------------

    async def exists(self, collection_id: str, item_id: str) -> bool:
        path = self._artifact_path(collection_id, item_id)
        return await asyncio.to_thread(path.is_file)

    async def get(self, collection_id: str, item_id: str) -> str:
        path = self._artifact_path(collection_id, item_id)
        content = await asyncio.to_thread(self._read_sync, collection_id, item_id, path)
        logger.debug("cache_hit", collection_id=collection_id, item_id=item_id)
        return content

    async def get_many(self, collection_id: str, item_ids: Iterable[str]) -> dict[str, str]:
        found: dict[str, str] = {}
        for item_id in item_ids:
            try:
                found[item_id] = await self.get(collection_id, item_id)
            except ArtifactNotFoundError:
                logger.debug("cache_miss", collection_id=collection_id, item_id=item_id)
        return found

    async def put(self, collection_id: str, item_id: str, content: str) -> None:
        path = self._artifact_path(collection_id, item_id)
        await asyncio.to_thread(self._write_sync, path, content)
        logger.debug("cache_set", collection_id=collection_id, item_id=item_id, path=str(path))

    async def list_keys(self, collection_id: str) -> set[str]:
        return await asyncio.to_thread(self._list_keys_sync, self.collection_dir(collection_id))

    async def list_collections(self) -> list[str]:
        return sort_collection_ids(await asyncio.to_thread(self._list_collections_sync))

    def get_provider_name(self) -> str:
        return "file"

    # -- Sync helpers (executed via asyncio.to_thread) ------------------

    def _read_sync(self, collection_id: str, item_id: str, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(
                message=f"No cached artifact for {collection_id}/{item_id}",
                provider_name=self.get_provider_name(),
            ) from exc
        except OSError as exc:
            raise PersistenceError(
                message=f"Could not read {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _write_sync(self, path: Path, content: str) -> None:
        try:
            atomic_write_text(path, content)
        except OSError as exc:
            raise PersistenceError(
                message=f"Could not write {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    @staticmethod
    def _list_keys_sync(directory: Path) -> set[str]:
        if not directory.is_dir():
            return set()
        return {p.stem for p in directory.glob(f"*{_ARTIFACT_SUFFIX}") if p.is_file()}

    def _list_collections_sync(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return [
            child.name
            for child in self._root.iterdir()
            if child.is_dir() and _SAFE_KEY.match(child.name)
            and any(child.glob(f"*{_ARTIFACT_SUFFIX}"))
        ]
