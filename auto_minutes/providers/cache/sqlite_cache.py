"""SQLite-backed artifact cache.

Keeps every generated artifact in a single database file instead of one
file per session.  Uses ``aiosqlite`` for async I/O.  The same database file
can also hold the manifests (see ``SQLiteManifestStore``).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import aiosqlite
import structlog

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.utils.errors import ArtifactNotFoundError, PersistenceError
from auto_minutes.utils.text_normalizer import sort_collection_ids

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("cache/auto_minutes.db")

_CREATE_ARTIFACTS_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS artifacts (
    collection_id TEXT NOT NULL,
    item_id       TEXT NOT NULL,
    content       TEXT NOT NULL,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    PRIMARY KEY (collection_id, item_id)
);
"""

_UPSERT_ARTIFACT_SQL = """\
INSERT INTO artifacts (collection_id, item_id, content)
VALUES (?, ?, ?)
ON CONFLICT (collection_id, item_id) DO UPDATE SET
    content = excluded.content,
    created_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_ARTIFACT_SQL = "SELECT content FROM artifacts WHERE collection_id = ? AND item_id = ?;"
_SELECT_KEYS_SQL = "SELECT item_id FROM artifacts WHERE collection_id = ?;"
_SELECT_COLLECTIONS_SQL = "SELECT DISTINCT collection_id FROM artifacts;"


class SQLiteArtifactCache(IArtifactCache):
    """Artifact cache stored in the ``artifacts`` table of a SQLite file."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the artifacts table if it doesn't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_ARTIFACTS_TABLE_SQL)
                await db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Could not initialise {self._db_path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("artifact_db_initialized", path=str(self._db_path))

    # ------------------------------------------------------------------
    # IArtifactCache implementation
    # ------------------------------------------------------------------

    async def exists(self, collection_id: str, item_id: str) -> bool:
        return await self._fetch_content(collection_id, item_id) is not None

    async def get(self, collection_id: str, item_id: str) -> str:
        content = await self._fetch_content(collection_id, item_id)
        if content is None:
            raise ArtifactNotFoundError(
                message=f"No cached artifact for {collection_id}/{item_id}",
                provider_name=self.get_provider_name(),
            )
        return content

    async def get_many(self, collection_id: str, item_ids: Iterable[str]) -> dict[str, str]:
        wanted = list(item_ids)
        if not wanted:
            return {}
        placeholders = ", ".join("?" for _ in wanted)
        sql = (
            "SELECT item_id, content FROM artifacts "
            f"WHERE collection_id = ? AND item_id IN ({placeholders});"
        )
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(sql, (str(collection_id), *wanted))
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Artifact batch read failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        by_id = {row[0]: row[1] for row in rows}
        # Preserve the caller's order.
        return {item_id: by_id[item_id] for item_id in wanted if item_id in by_id}

    async def put(self, collection_id: str, item_id: str, content: str) -> None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_UPSERT_ARTIFACT_SQL, (str(collection_id), item_id, content))
                await db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Could not store artifact {collection_id}/{item_id}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("cache_set", collection_id=collection_id, item_id=item_id)

    async def list_keys(self, collection_id: str) -> set[str]:
        rows = await self._query(_SELECT_KEYS_SQL, (str(collection_id),))
        return {row[0] for row in rows}

    async def list_collections(self) -> list[str]:
        rows = await self._query(_SELECT_COLLECTIONS_SQL, ())
        return sort_collection_ids(row[0] for row in rows)

    def get_provider_name(self) -> str:
        return "sqlite"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch_content(self, collection_id: str, item_id: str) -> str | None:
        rows = await self._query(_SELECT_ARTIFACT_SQL, (str(collection_id), item_id))
        return rows[0][0] if rows else None

    async def _query(self, sql: str, params: tuple) -> list:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(sql, params)
                return list(await cursor.fetchall())
        except aiosqlite.Error as exc:
            raise PersistenceError(
                message=f"Artifact query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
