"""Small text helpers shared by the publisher and the stores."""

from __future__ import annotations

import re

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lower-case *name* and collapse every run of non ``[a-z0-9]`` into ``-``.

    ``"TLS (Transport Layer Security)"`` becomes ``"tls-transport-layer-security"``.
    """
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


def collection_sort_key(collection_id: str) -> tuple[int, int, str]:
    """Sort key placing numeric collection ids first, in numeric order.

    ``["12", "3", "101"]`` sorts to ``["3", "12", "101"]``; non-numeric ids
    follow, ordered lexically.
    """
    if collection_id.isdigit():
        return (0, int(collection_id), collection_id)
    return (1, 0, collection_id)


def sort_collection_ids(collection_ids) -> list[str]:
    return sorted({str(c) for c in collection_ids}, key=collection_sort_key)


def sort_display_names(names) -> list[str]:
    """Sort group names alphabetically, ignoring case."""
    return sorted(names, key=lambda n: (n.casefold(), n))
