"""Dependency wiring for the CLI.

Each ``build_*`` function turns :class:`Settings` into one concrete adapter
behind its interface.  Commands construct only what they need: ``assemble``
and ``status`` never build an HTTP client or an LLM provider, so they work
without network access or API keys.
"""

from __future__ import annotations

import httpx

from auto_minutes.config.settings import Settings
from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.interfaces.item_source import IItemSource, ITranscriptFetcher
from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.pipeline.assembler import AssembleStage
from auto_minutes.pipeline.collector import CollectStage
from auto_minutes.providers.cache.file_cache import FileArtifactCache
from auto_minutes.providers.cache.sqlite_cache import SQLiteArtifactCache
from auto_minutes.providers.llm import build_llm_provider
from auto_minutes.providers.manifest.json_store import JSONManifestStore
from auto_minutes.providers.manifest.sqlite_store import SQLiteManifestStore
from auto_minutes.providers.publish.git_pages_deployer import GitPagesDeployer
from auto_minutes.providers.publish.markdown_site_publisher import MarkdownSitePublisher
from auto_minutes.providers.source.meetecho_provider import MeetechoItemSource
from auto_minutes.providers.source.proceedings_provider import ProceedingsItemSource
from auto_minutes.providers.source.validating_source import ValidatingItemSource
from auto_minutes.providers.transcript.meetecho_transcript_provider import (
    MeetechoTranscriptFetcher,
)
from auto_minutes.services.minutes_generator import MinutesGenerator


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Shared client for session listing and transcript download."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def build_item_source(settings: Settings, http_client: httpx.AsyncClient) -> IItemSource:
    if settings.item_source == "proceedings":
        inner: IItemSource = ProceedingsItemSource(http_client)
    else:
        inner = MeetechoItemSource(http_client)
    return ValidatingItemSource(inner)


def build_transcript_fetcher(http_client: httpx.AsyncClient) -> ITranscriptFetcher:
    return MeetechoTranscriptFetcher(http_client)


def build_generator(settings: Settings, backend: str | None = None) -> MinutesGenerator:
    """Build the minutes generator for *backend*.

    Raises
    ------
    ConfigurationError
        If the chosen backend has no API key.
    """
    provider = build_llm_provider(settings, backend)
    return MinutesGenerator(
        provider,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
    )


async def build_storage(settings: Settings) -> tuple[IArtifactCache, IManifestStore]:
    """Build the artifact cache and manifest store for the configured backend."""
    if settings.storage_backend == "sqlite":
        cache = SQLiteArtifactCache(settings.sqlite_path)
        manifest_store = SQLiteManifestStore(settings.sqlite_path)
        await cache.initialize()
        await manifest_store.initialize()
        return cache, manifest_store
    return FileArtifactCache(settings.cache_dir), JSONManifestStore(settings.cache_dir)


def build_publisher(settings: Settings) -> MarkdownSitePublisher:
    return MarkdownSitePublisher(
        settings.site_dir,
        collection_prefix=settings.collection_prefix,
        collection_label=settings.collection_label,
        layout=settings.page_layout,
    )


def build_deployer(settings: Settings) -> GitPagesDeployer:
    return GitPagesDeployer(
        repo_url=settings.pages_repo_url,
        site_dir=settings.site_dir,
        branch=settings.pages_branch,
        workdir=settings.pages_workdir,
        baseline_tag=settings.pages_baseline_tag,
        collection_label=settings.collection_label,
    )


def build_collect_stage(
    settings: Settings,
    http_client: httpx.AsyncClient,
    cache: IArtifactCache,
    manifest_store: IManifestStore,
    backend: str | None = None,
) -> CollectStage:
    return CollectStage(
        item_source=build_item_source(settings, http_client),
        fetcher=build_transcript_fetcher(http_client),
        generator=build_generator(settings, backend),
        cache=cache,
        manifest_store=manifest_store,
    )


def build_assemble_stage(
    settings: Settings, cache: IArtifactCache, manifest_store: IManifestStore
) -> AssembleStage:
    return AssembleStage(cache, manifest_store, build_publisher(settings))
