"""auto-minutes domain models -- re-exports all public model classes.

The models are organized across two submodules by concern:
    - item.py      -- sessions, groups and the per-meeting manifest
    - pipeline.py  -- tagged per-session outcomes and stage reports
"""

from __future__ import annotations

from auto_minutes.models.item import Group, GroupManifest, GroupMember, Item
from auto_minutes.models.pipeline import (
    AssemblyReport,
    CollectReport,
    GroupSummary,
    ItemOutcome,
    ItemStatus,
)

__all__ = [
    "AssemblyReport",
    "CollectReport",
    "Group",
    "GroupManifest",
    "GroupMember",
    "GroupSummary",
    "Item",
    "ItemOutcome",
    "ItemStatus",
]
