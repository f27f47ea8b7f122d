"""Group manifest stores (JSON file, SQLite, memory)."""

from auto_minutes.providers.manifest.json_store import JSONManifestStore
from auto_minutes.providers.manifest.memory_store import MemoryManifestStore
from auto_minutes.providers.manifest.sqlite_store import SQLiteManifestStore

__all__ = ["JSONManifestStore", "MemoryManifestStore", "SQLiteManifestStore"]
