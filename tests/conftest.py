"""Shared pytest fixtures for the auto-minutes test suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from auto_minutes.config.settings import Settings
from auto_minutes.interfaces.item_source import IItemSource, ITranscriptFetcher
from auto_minutes.interfaces.publisher import IPublisher
from auto_minutes.models.item import Item
from auto_minutes.providers.cache.memory_cache import MemoryArtifactCache
from auto_minutes.providers.manifest.memory_store import MemoryManifestStore
from auto_minutes.utils.errors import GenerationError, UnavailableError

# ---------------------------------------------------------------------------
# Fakes for the external collaborators
# ---------------------------------------------------------------------------


class FakeItemSource(IItemSource):
    """Returns a fixed item list; counts calls."""

    def __init__(self, items: Sequence[Item]) -> None:
        self.items = list(items)
        self.calls = 0

    async def list_items(self, collection_id: str) -> list[Item]:
        self.calls += 1
        return list(self.items)

    def get_provider_name(self) -> str:
        return "fake_source"


class FakeTranscriptFetcher(ITranscriptFetcher):
    """Serves ``transcript:<item_id>``; ids in *unavailable* raise UnavailableError."""

    def __init__(self, unavailable: Sequence[str] = (), fail_all: bool = False) -> None:
        self.unavailable = set(unavailable)
        self.fail_all = fail_all
        self.fetched: list[str] = []

    async def fetch(self, item_id: str) -> str:
        self.fetched.append(item_id)
        if self.fail_all or item_id in self.unavailable:
            raise UnavailableError(message=f"no transcript for {item_id}", provider_name="fake")
        return f"transcript:{item_id}"

    def get_provider_name(self) -> str:
        return "fake_fetcher"


class FakeGenerator:
    """Stands in for MinutesGenerator; transcripts in *failing* raise GenerationError."""

    def __init__(self, failing: Sequence[str] = (), fail_all: bool = False) -> None:
        self.failing = {f"transcript:{item_id}" for item_id in failing}
        self.fail_all = fail_all
        self.calls: list[tuple[str, str]] = []

    async def generate(self, content: str, display_name: str) -> str:
        self.calls.append((content, display_name))
        if self.fail_all or content in self.failing:
            raise GenerationError(message=f"model refused {content}", provider_name="fake")
        return f"minutes of {content.removeprefix('transcript:')}"


class RecordingPublisher(IPublisher):
    """Captures everything the assembler publishes."""

    def __init__(self) -> None:
        self.groups: list[tuple[str, str, str, list[str]]] = []
        self.collection_indexes: list[tuple[str, list[str]]] = []
        self.root_indexes: list[list[str]] = []

    async def publish_group(
        self,
        collection_id: str,
        display_name: str,
        combined_text: str,
        external_refs: Sequence[str],
    ) -> None:
        self.groups.append((collection_id, display_name, combined_text, list(external_refs)))

    async def publish_collection_index(
        self, collection_id: str, display_names: Sequence[str]
    ) -> None:
        self.collection_indexes.append((collection_id, list(display_names)))

    async def publish_root_index(self, collection_ids: Sequence[str]) -> None:
        self.root_indexes.append(list(collection_ids))

    def texts(self) -> dict[str, str]:
        return {name: text for _, name, text, _ in self.groups}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def make_item(item_id: str, display_name: str, with_ref: bool = True) -> Item:
    ref = f"https://meetecho-player.ietf.org/playout/?session={item_id}" if with_ref else None
    return Item(item_id=item_id, display_name=display_name, external_ref=ref)


@pytest.fixture
def sample_items() -> list[Item]:
    """Two TLS recordings and one QUIC recording of meeting 123."""
    return [
        make_item("IETF123-TLS-20250722-0930", "TLS"),
        make_item("IETF123-TLS-20250724-1300", "TLS"),
        make_item("IETF123-QUIC-20250723-0730", "QUIC"),
    ]


@pytest.fixture
def memory_cache() -> MemoryArtifactCache:
    return MemoryArtifactCache()


@pytest.fixture
def memory_manifest_store() -> MemoryManifestStore:
    return MemoryManifestStore()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        anthropic_api_key="test-anthropic",
        openai_api_key="sk-test",
        gemini_api_key="test-gemini",
    )


# Factory fixtures: tests build fakes with per-test failure sets.


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def source_factory():
    return FakeItemSource


@pytest.fixture
def fetcher_factory():
    return FakeTranscriptFetcher


@pytest.fixture
def generator_factory():
    return FakeGenerator
