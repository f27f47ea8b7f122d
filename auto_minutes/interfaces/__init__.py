"""Public interface definitions for storage backends and external services.

Every external service (session listing, transcript download, LLM, site
output) and every storage backend is accessed exclusively through the
abstract base classes defined in this package.  Concrete adapters implement
these interfaces and are injected by the CLI factories in
``auto_minutes/cli/factories.py``.  Unit tests inject fakes instead.

CONCRETE PROVIDER MAP:
    Interface            →  Concrete implementations (in auto_minutes/providers/)
    ─────────────────────────────────────────────────────────────────────
    IItemSource          →  MeetechoItemSource, ProceedingsItemSource,
                            ValidatingItemSource
    ITranscriptFetcher   →  MeetechoTranscriptFetcher
    ILLMProvider         →  AnthropicLLMProvider, OpenAILLMProvider,
                            GeminiLLMProvider
    IArtifactCache       →  FileArtifactCache, SQLiteArtifactCache,
                            MemoryArtifactCache
    IManifestStore       →  JSONManifestStore, SQLiteManifestStore,
                            MemoryManifestStore
    IPublisher           →  MarkdownSitePublisher
"""

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.interfaces.item_source import IItemSource, ITranscriptFetcher
from auto_minutes.interfaces.llm_provider import ILLMProvider
from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.interfaces.publisher import IPublisher

__all__ = [
    "IArtifactCache",
    "IItemSource",
    "ILLMProvider",
    "IManifestStore",
    "IPublisher",
    "ITranscriptFetcher",
]
