"""Domain models for sessions, groups and the per-meeting manifest.

Defines Pydantic v2 models for the data that flows between the session
sources, the collect stage and the assembler.  All models use frozen config
to enforce immutability.

Architecture note:
    An :class:`Item` is never persisted itself.  What is persisted is the
    generated artifact (keyed by ``item_id``) and the :class:`GroupManifest`,
    which records which items of a meeting produced minutes and the links
    needed to publish them without touching the network again.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """One raw recording as listed by a session source.

    ``item_id`` is the Meetecho session id (``IETF123-6LO-20250723-0730``),
    stable across runs and unique; ``display_name`` is shared by every
    recording of the same working group.
    """

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Stable unique session identifier.")
    display_name: str = Field(description="Working-group / session name; not unique.")
    external_ref: str | None = Field(
        default=None, description="Link to the original recording, if known."
    )


class GroupMember(BaseModel):
    """A member of a :class:`Group` as stored in the manifest."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    external_ref: str | None = None


class Group(BaseModel):
    """All successfully processed recordings that share a display name."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    # Source order; the assembler never re-sorts members.
    items: list[GroupMember] = Field(default_factory=list)

    @property
    def item_ids(self) -> list[str]:
        return [member.item_id for member in self.items]

    @property
    def external_refs(self) -> list[str]:
        return [member.external_ref for member in self.items if member.external_ref]


class GroupManifest(BaseModel):
    """Durable record of the groups produced for one meeting.

    The manifest is the single source of truth for the assembler.  It is
    rewritten whole by the collect stage and never merged.
    """

    model_config = ConfigDict(frozen=True)

    collection_id: str
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )
    groups: list[Group] = Field(default_factory=list)

    def group_names(self) -> list[str]:
        return [group.display_name for group in self.groups]
