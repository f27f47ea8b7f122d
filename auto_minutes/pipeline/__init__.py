"""Two-stage minutes pipeline: collect/generate, then assemble."""

from auto_minutes.pipeline.assembler import SEPARATOR, AssembleStage, combine_artifacts
from auto_minutes.pipeline.collector import (
    CollectStage,
    build_groups,
    group_items_by_name,
    summarize_groups,
)
from auto_minutes.pipeline.driver import PipelineDriver

__all__ = [
    "SEPARATOR",
    "AssembleStage",
    "CollectStage",
    "PipelineDriver",
    "build_groups",
    "combine_artifacts",
    "group_items_by_name",
    "summarize_groups",
]
