"""Result models for the collect and assemble stages.

The collect stage turns every session into an :class:`ItemOutcome` -- a
tagged result that is either ``OK`` (minutes available, from the cache or
freshly generated), ``UNAVAILABLE`` (no transcript) or ``FAILED`` (the
generator raised).  Grouping and manifest construction are then plain
functions over a list of outcomes instead of early returns scattered through
the fetch loop.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from auto_minutes.models.item import GroupManifest, Item


class ItemStatus(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    OK = "ok"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    """Per-session result of the collect stage."""

    model_config = ConfigDict(frozen=True)

    item: Item
    status: ItemStatus
    content: str | None = None
    # True when the artifact came from the cache rather than the generator.
    from_cache: bool = False
    reason: str | None = None

    @classmethod
    def ok(cls, item: Item, content: str, from_cache: bool = False) -> ItemOutcome:
        return cls(item=item, status=ItemStatus.OK, content=content, from_cache=from_cache)

    @classmethod
    def unavailable(cls, item: Item, reason: str | None = None) -> ItemOutcome:
        return cls(item=item, status=ItemStatus.UNAVAILABLE, reason=reason)

    @classmethod
    def failed(cls, item: Item, reason: str) -> ItemOutcome:
        return cls(item=item, status=ItemStatus.FAILED, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status is ItemStatus.OK

    @property
    def is_new(self) -> bool:
        """``True`` when this outcome wrote a new artifact to the cache."""
        return self.is_ok and not self.from_cache


class GroupSummary(BaseModel):
    """Per-group counts reported by the CLI after a collect run."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    processed: int = 0
    generated: int = 0
    skipped: int = 0
    failed: int = 0
    failures: list[str] = Field(default_factory=list)


class CollectReport(BaseModel):
    """Outcome of one collect run for one meeting."""

    model_config = ConfigDict(frozen=True)

    collection_id: str
    # Every session the source listed, before any filtering.
    items: list[Item] = Field(default_factory=list)
    outcomes: list[ItemOutcome] = Field(default_factory=list)
    summaries: list[GroupSummary] = Field(default_factory=list)
    manifest: GroupManifest | None = None
    manifest_written: bool = False

    @property
    def generated(self) -> int:
        return sum(1 for o in self.outcomes if o.is_new)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is ItemStatus.FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status is ItemStatus.UNAVAILABLE)


class AssemblyReport(BaseModel):
    """Outcome of one assemble run across all requested meetings."""

    model_config = ConfigDict(frozen=True)

    collections: list[str] = Field(default_factory=list)
    skipped_collections: list[str] = Field(default_factory=list)
    groups_published: int = 0
    missing_artifacts: list[str] = Field(default_factory=list)
