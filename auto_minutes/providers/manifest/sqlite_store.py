"""SQLite-backed manifest store.

One row per collection in the ``manifests`` table; the row body is the JSON
serialisation of the :class:`GroupManifest`.  Replacing a manifest is a
single-statement transaction, which gives the whole-manifest atomicity the
collect stage relies on.
"""

from __future__ import annotations

from pathlib import Path

import aiosqlite
import structlog
from pydantic import ValidationError

from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.models.item import GroupManifest
from auto_minutes.utils.errors import ManifestMissingError, PersistenceError

logger = structlog.get_logger(logger_name=__name__)

_CREATE_MANIFESTS_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS manifests (
    collection_id TEXT PRIMARY KEY,
    generated_at  TEXT NOT NULL,
    body          TEXT NOT NULL
);
"""

_REPLACE_MANIFEST_SQL = """\
INSERT OR REPLACE INTO manifests (collection_id, generated_at, body)
VALUES (?, ?, ?);
"""

_SELECT_MANIFEST_SQL = "SELECT body FROM manifests WHERE collection_id = ?;"


class SQLiteManifestStore(IManifestStore):
    """Manifest store kept in the ``manifests`` table of a SQLite file."""

    def __init__(self, db_path: str | Path = Path("cache/auto_minutes.db")) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the manifests table if it doesn't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_MANIFESTS_TABLE_SQL)
                await db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Could not initialise {self._db_path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("manifest_db_initialized", path=str(self._db_path))

    async def save(self, collection_id: str, manifest: GroupManifest) -> None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(
                    _REPLACE_MANIFEST_SQL,
                    (
                        str(collection_id),
                        manifest.generated_at.isoformat(),
                        manifest.model_dump_json(),
                    ),
                )
                await db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Could not store manifest for {collection_id}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("manifest_saved", collection_id=collection_id, groups=len(manifest.groups))

    async def load(self, collection_id: str) -> GroupManifest:
        body = await self._fetch_body(collection_id)
        if body is None:
            raise ManifestMissingError(
                message=f"No manifest for collection {collection_id}",
                provider_name=self.get_provider_name(),
            )
        try:
            return GroupManifest.model_validate_json(body)
        except ValidationError as exc:
            raise PersistenceError(
                message=f"Corrupt manifest for {collection_id}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def exists(self, collection_id: str) -> bool:
        return await self._fetch_body(collection_id) is not None

    def get_provider_name(self) -> str:
        return "sqlite"

    async def _fetch_body(self, collection_id: str) -> str | None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(_SELECT_MANIFEST_SQL, (str(collection_id),))
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Manifest query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return row[0] if row else None
