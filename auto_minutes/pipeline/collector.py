"""Collect/Generate stage of the minutes pipeline.

For one meeting the stage lists every recorded session, and for each
session either reuses the minutes already in the artifact cache or fetches
the transcript and generates fresh minutes.  Every session ends up as a
tagged :class:`ItemOutcome`; grouping and the manifest are then derived from
the list of outcomes by the pure functions at the top of this module.

Invariants:
    - A cached artifact is never regenerated or overwritten.
    - Sessions are processed strictly one at a time, in source order.
    - The manifest is written only after the whole pass, and only when the
      run produced new minutes (or no manifest exists yet), so a run that
      fails part-way never replaces a previously good manifest.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import structlog

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.interfaces.item_source import IItemSource, ITranscriptFetcher
from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.models.item import Group, GroupManifest, GroupMember, Item
from auto_minutes.models.pipeline import (
    CollectReport,
    GroupSummary,
    ItemOutcome,
    ItemStatus,
)
from auto_minutes.services.minutes_generator import MinutesGenerator
from auto_minutes.utils.errors import (
    ConfigurationError,
    GenerationError,
    UnavailableError,
)
from auto_minutes.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def group_items_by_name(items: Iterable[Item]) -> dict[str, list[Item]]:
    """Group *items* by display name, keeping first-seen and source order."""
    grouped: dict[str, list[Item]] = {}
    for item in items:
        grouped.setdefault(item.display_name, []).append(item)
    return grouped


def build_groups(outcomes: Iterable[ItemOutcome]) -> list[Group]:
    """Build the manifest groups from per-session outcomes.

    A group is retained only if at least one of its sessions is ``OK``;
    only ``OK`` sessions become members, in the order they were processed.
    """
    members: dict[str, list[GroupMember]] = {}
    for outcome in outcomes:
        bucket = members.setdefault(outcome.item.display_name, [])
        if outcome.is_ok:
            bucket.append(
                GroupMember(item_id=outcome.item.item_id, external_ref=outcome.item.external_ref)
            )
    return [
        Group(display_name=name, items=group_members)
        for name, group_members in members.items()
        if group_members
    ]


def summarize_groups(outcomes: Iterable[ItemOutcome]) -> list[GroupSummary]:
    """Count processed / skipped / failed sessions per group."""
    counts: dict[str, dict] = {}
    for outcome in outcomes:
        entry = counts.setdefault(
            outcome.item.display_name,
            {"processed": 0, "generated": 0, "skipped": 0, "failed": 0, "failures": []},
        )
        if outcome.status is ItemStatus.OK:
            entry["processed"] += 1
            if outcome.is_new:
                entry["generated"] += 1
        elif outcome.status is ItemStatus.UNAVAILABLE:
            entry["skipped"] += 1
        else:
            entry["failed"] += 1
            entry["failures"].append(f"{outcome.item.item_id}: {outcome.reason}")
    return [GroupSummary(display_name=name, **entry) for name, entry in counts.items()]


def matches_filter(item: Item, name_filter: str | None) -> bool:
    """Case-insensitive substring match of *name_filter* on the display name."""
    if not name_filter:
        return True
    return name_filter.casefold() in item.display_name.casefold()


# ---------------------------------------------------------------------------
# Stage
# ---------------------------------------------------------------------------


class CollectStage:
    """Fetch, generate and cache minutes for every session of a meeting.

    Parameters
    ----------
    item_source:
        Lists the recorded sessions of a meeting.
    fetcher:
        Downloads one raw transcript.
    generator:
        Turns a transcript into minutes.
    cache:
        Durable per-session artifact store.
    manifest_store:
        Durable per-meeting group manifest store.
    """

    def __init__(
        self,
        item_source: IItemSource,
        fetcher: ITranscriptFetcher,
        generator: MinutesGenerator,
        cache: IArtifactCache,
        manifest_store: IManifestStore,
    ) -> None:
        self._item_source = item_source
        self._fetcher = fetcher
        self._generator = generator
        self._cache = cache
        self._manifest_store = manifest_store

    async def run(
        self,
        collection_id: str,
        name_filter: str | None = None,
        on_items: Callable[[Sequence[Item]], None] | None = None,
    ) -> CollectReport:
        """Run the collect stage for one meeting.

        Parameters
        ----------
        collection_id:
            The meeting number.
        name_filter:
            Optional case-insensitive substring; only matching sessions are
            fetched and generated.  Non-matching sessions that are already
            cached still count towards the manifest.
        on_items:
            Optional callback receiving the full session listing before any
            session is processed.

        Returns
        -------
        CollectReport
            Per-session outcomes, per-group summaries and the manifest.

        Raises
        ------
        SourceError
            If the session listing cannot be fetched.
        ConfigurationError
            If *name_filter* matches no session.
        PersistenceError
            If a cache or manifest write fails.
        """
        collection_id = str(collection_id)
        items = await self._item_source.list_items(collection_id)
        logger.info("collect_started", collection_id=collection_id, items=len(items))
        if on_items is not None:
            on_items(items)

        if name_filter and not any(matches_filter(item, name_filter) for item in items):
            raise ConfigurationError(
                message=f'No sessions found matching "{name_filter}" in meeting {collection_id}'
            )

        outcomes: list[ItemOutcome] = []
        for display_name, group_items in group_items_by_name(items).items():
            in_filter = any(matches_filter(item, name_filter) for item in group_items)
            if in_filter:
                logger.info(
                    "group_started",
                    collection_id=collection_id,
                    display_name=display_name,
                    sessions=len(group_items),
                )
            for item in group_items:
                outcome = await self._process_item(
                    collection_id, item, allow_generate=matches_filter(item, name_filter)
                )
                if outcome is not None:
                    outcomes.append(outcome)

        groups = build_groups(outcomes)
        manifest = GroupManifest(collection_id=collection_id, groups=groups)
        manifest_written = await self._save_manifest_if_needed(collection_id, manifest, outcomes)

        report = CollectReport(
            collection_id=collection_id,
            items=items,
            outcomes=outcomes,
            summaries=summarize_groups(outcomes),
            manifest=manifest,
            manifest_written=manifest_written,
        )
        logger.info(
            "collect_finished",
            collection_id=collection_id,
            groups=len(groups),
            generated=report.generated,
            skipped=report.skipped,
            failed=report.failed,
            manifest_written=manifest_written,
        )
        return report

    # ------------------------------------------------------------------
    # Per-session processing
    # ------------------------------------------------------------------

    async def _process_item(
        self, collection_id: str, item: Item, allow_generate: bool = True
    ) -> ItemOutcome | None:
        """Return the outcome for one session, or ``None`` if it is out of scope."""
        if await self._cache.exists(collection_id, item.item_id):
            content = await self._cache.get(collection_id, item.item_id)
            logger.debug("session_cached", collection_id=collection_id, item_id=item.item_id)
            return ItemOutcome.ok(item, content, from_cache=True)

        if not allow_generate:
            return None

        try:
            transcript = await self._fetcher.fetch(item.item_id)
        except UnavailableError as exc:
            logger.info(
                "transcript_unavailable",
                collection_id=collection_id,
                item_id=item.item_id,
                reason=str(exc),
            )
            return ItemOutcome.unavailable(item, reason=str(exc))
        if not transcript or not transcript.strip():
            logger.info("transcript_empty", collection_id=collection_id, item_id=item.item_id)
            return ItemOutcome.unavailable(item, reason="empty transcript")

        try:
            minutes = await self._generator.generate(transcript, item.display_name)
        except GenerationError as exc:
            logger.error(
                "generation_failed",
                collection_id=collection_id,
                item_id=item.item_id,
                error=str(exc),
            )
            return ItemOutcome.failed(item, reason=str(exc))

        # PersistenceError propagates: a write failure aborts the run.
        await self._cache.put(collection_id, item.item_id, minutes)
        logger.info("session_generated", collection_id=collection_id, item_id=item.item_id)
        return ItemOutcome.ok(item, minutes)

    async def _save_manifest_if_needed(
        self,
        collection_id: str,
        manifest: GroupManifest,
        outcomes: list[ItemOutcome],
    ) -> bool:
        has_new_content = any(outcome.is_new for outcome in outcomes)
        if not has_new_content:
            if not manifest.groups or await self._manifest_store.exists(collection_id):
                logger.info("manifest_unchanged", collection_id=collection_id)
                return False
        await self._manifest_store.save(collection_id, manifest)
        return True
