"""Pipeline driver: collect/generate, then assemble.

The two stages share nothing but durable state (artifact cache and
manifest store), so each can be invoked on its own and re-run at will.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import structlog

from auto_minutes.models.item import Item
from auto_minutes.models.pipeline import AssemblyReport, CollectReport
from auto_minutes.pipeline.assembler import AssembleStage
from auto_minutes.pipeline.collector import CollectStage
from auto_minutes.utils.logging import get_logger


class PipelineDriver:
    """Runs the collect and assemble stages, separately or back to back.

    Either stage may be ``None`` when a command only needs the other one
    (``assemble`` never needs an LLM key, for instance).
    """

    def __init__(
        self,
        collect_stage: CollectStage | None = None,
        assemble_stage: AssembleStage | None = None,
    ) -> None:
        self._collect_stage = collect_stage
        self._assemble_stage = assemble_stage
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def collect(
        self,
        collection_id: str,
        name_filter: str | None = None,
        on_items: Callable[[Sequence[Item]], None] | None = None,
    ) -> CollectReport:
        if self._collect_stage is None:
            raise RuntimeError("PipelineDriver was built without a collect stage")
        return await self._collect_stage.run(
            collection_id, name_filter=name_filter, on_items=on_items
        )

    async def assemble(self, collection_ids: Iterable[str] | None = None) -> AssemblyReport:
        if self._assemble_stage is None:
            raise RuntimeError("PipelineDriver was built without an assemble stage")
        return await self._assemble_stage.run(collection_ids)

    async def run(
        self,
        collection_id: str,
        name_filter: str | None = None,
        on_items: Callable[[Sequence[Item]], None] | None = None,
    ) -> tuple[CollectReport, AssemblyReport]:
        """Collect one meeting, then re-assemble every cached meeting.

        Assembly covers the whole cache so the site tree is always complete,
        whichever meeting was just collected.
        """
        collect_report = await self.collect(
            collection_id, name_filter=name_filter, on_items=on_items
        )
        assembly_report = await self.assemble()
        self._logger.info(
            "pipeline_finished",
            collection_id=collect_report.collection_id,
            generated=collect_report.generated,
            groups_published=assembly_report.groups_published,
        )
        return collect_report, assembly_report
