"""JSON-file manifest store.

Writes ``<cache_dir>/<collection_id>/manifest.json`` next to the cached
artifacts of the same meeting, so one directory holds everything the
assembler needs.  Saves go through a temp file and ``os.replace``: a crash
mid-write leaves the previous manifest intact.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog
from pydantic import ValidationError

from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.models.item import GroupManifest
from auto_minutes.providers.cache.file_cache import validate_key
from auto_minutes.utils.atomic_io import atomic_write_text
from auto_minutes.utils.errors import ManifestMissingError, PersistenceError

logger = structlog.get_logger(logger_name=__name__)

MANIFEST_FILENAME = "manifest.json"


class JSONManifestStore(IManifestStore):
    """Manifest store keeping one pretty-printed JSON file per collection."""

    def __init__(self, cache_dir: str | Path = "cache") -> None:
        self._root = Path(cache_dir)

    def manifest_path(self, collection_id: str) -> Path:
        return self._root / validate_key(str(collection_id), "collection id") / MANIFEST_FILENAME

    async def save(self, collection_id: str, manifest: GroupManifest) -> None:
        path = self.manifest_path(collection_id)
        await asyncio.to_thread(self._write_sync, path, manifest.model_dump_json(indent=2) + "\n")
        logger.info(
            "manifest_saved",
            collection_id=collection_id,
            groups=len(manifest.groups),
            path=str(path),
        )

    async def load(self, collection_id: str) -> GroupManifest:
        path = self.manifest_path(collection_id)
        raw = await asyncio.to_thread(self._read_sync, collection_id, path)
        try:
            return GroupManifest.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(
                message=f"Corrupt manifest {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def exists(self, collection_id: str) -> bool:
        return await asyncio.to_thread(self.manifest_path(collection_id).is_file)

    def get_provider_name(self) -> str:
        return "json"

    # -- Sync helpers (executed via asyncio.to_thread) ------------------

    def _write_sync(self, path: Path, text: str) -> None:
        try:
            atomic_write_text(path, text)
        except OSError as exc:
            raise PersistenceError(
                message=f"Could not write manifest {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _read_sync(self, collection_id: str, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ManifestMissingError(
                message=f"No manifest for collection {collection_id}",
                provider_name=self.get_provider_name(),
            ) from exc
        except OSError as exc:
            raise PersistenceError(
                message=f"Could not read manifest {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
