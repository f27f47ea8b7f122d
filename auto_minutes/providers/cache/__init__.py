"""Artifact cache providers.

FileArtifactCache is the default: one Markdown file per session, readable
and deletable by hand.  SQLiteArtifactCache keeps everything in one database
file.  MemoryArtifactCache is used by tests.
"""

from auto_minutes.providers.cache.file_cache import FileArtifactCache
from auto_minutes.providers.cache.memory_cache import MemoryArtifactCache
from auto_minutes.providers.cache.sqlite_cache import SQLiteArtifactCache

__all__ = ["FileArtifactCache", "MemoryArtifactCache", "SQLiteArtifactCache"]
