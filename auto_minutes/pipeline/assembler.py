"""Assemble stage: rebuild the published minutes from durable state only.

Reads each meeting's manifest, batch-reads the cached minutes of every group
member, combines them into one document per working group and hands the
result to an :class:`IPublisher`.  This stage never touches the network or
an LLM, so it can be re-run at any time to regenerate the whole site.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import structlog

from auto_minutes.interfaces.artifact_cache import IArtifactCache
from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.interfaces.publisher import IPublisher
from auto_minutes.models.item import Group
from auto_minutes.models.pipeline import AssemblyReport
from auto_minutes.utils.errors import ManifestMissingError
from auto_minutes.utils.logging import get_logger
from auto_minutes.utils.session_ids import format_session_header
from auto_minutes.utils.text_normalizer import sort_collection_ids, sort_display_names

logger: structlog.BoundLogger = get_logger(__name__)

SEPARATOR = "\n\n---\n\n"


def combine_artifacts(item_ids: Sequence[str], artifacts: Mapping[str, str]) -> str:
    """Join the artifacts of *item_ids* in the given order.

    Each member is prefixed with its session date/time header when the id
    carries a parseable timestamp.  Ids absent from *artifacts* are skipped.
    """
    parts = [
        format_session_header(item_id) + artifacts[item_id]
        for item_id in item_ids
        if item_id in artifacts
    ]
    return SEPARATOR.join(parts)


class AssembleStage:
    """Combine cached minutes per group and publish them.

    Parameters
    ----------
    cache:
        Artifact cache the collect stage wrote to.
    manifest_store:
        Store holding one manifest per meeting.
    publisher:
        Render/publish target for the combined documents and indexes.
    """

    def __init__(
        self,
        cache: IArtifactCache,
        manifest_store: IManifestStore,
        publisher: IPublisher,
    ) -> None:
        self._cache = cache
        self._manifest_store = manifest_store
        self._publisher = publisher

    async def run(self, collection_ids: Iterable[str] | None = None) -> AssemblyReport:
        """Assemble and publish every cached meeting, or only *collection_ids*.

        Meetings without a manifest are skipped.  The root index lists the
        assembled meetings, plus meetings assembled by earlier runs, in
        ascending numeric order and is published once.
        """
        available = await self._cache.list_collections()
        if collection_ids is None:
            targets = available
        else:
            wanted = sort_collection_ids(collection_ids)
            cached = set(available)
            targets = [cid for cid in wanted if cid in cached]
            for cid in wanted:
                if cid not in targets:
                    logger.warning("collection_not_cached", collection_id=cid)

        assembled: list[str] = []
        skipped: list[str] = []
        missing: list[str] = []
        groups_published = 0

        for collection_id in targets:
            try:
                manifest = await self._manifest_store.load(collection_id)
            except ManifestMissingError:
                logger.warning("manifest_missing", collection_id=collection_id)
                skipped.append(collection_id)
                continue

            published_names: list[str] = []
            for group in manifest.groups:
                group_missing = await self._assemble_group(collection_id, group)
                missing.extend(group_missing)
                if len(group_missing) < len(group.items):
                    published_names.append(group.display_name)

            await self._publisher.publish_collection_index(
                collection_id, sort_display_names(published_names)
            )
            groups_published += len(published_names)
            assembled.append(collection_id)
            logger.info(
                "collection_assembled",
                collection_id=collection_id,
                groups=len(published_names),
            )

        # A partial run still lists meetings assembled by earlier runs.
        previously_assembled = [
            cid
            for cid in available
            if cid not in targets and await self._manifest_store.exists(cid)
        ]
        root_ids = sort_collection_ids([*assembled, *previously_assembled])
        await self._publisher.publish_root_index(root_ids)

        return AssemblyReport(
            collections=sort_collection_ids(assembled),
            skipped_collections=skipped,
            groups_published=groups_published,
            missing_artifacts=missing,
        )

    async def _assemble_group(self, collection_id: str, group: Group) -> list[str]:
        """Publish one group; return the member ids missing from the cache."""
        artifacts = await self._cache.get_many(collection_id, group.item_ids)
        missing = [item_id for item_id in group.item_ids if item_id not in artifacts]
        for item_id in missing:
            logger.warning(
                "artifact_missing",
                collection_id=collection_id,
                display_name=group.display_name,
                item_id=item_id,
            )
        if len(missing) == len(group.items):
            return missing

        combined = combine_artifacts(group.item_ids, artifacts)
        await self._publisher.publish_group(
            collection_id, group.display_name, combined, group.external_refs
        )
        return missing
