"""Helpers for Meetecho session identifiers.

A session identifier looks like ``IETF123-6LO-20250723-0730``:

    IETF<meeting> - <SESSION NAME, may contain '-'> - <YYYYMMDD> - <HHMM>

The identifier is the cache key for a generated artifact, and its trailing
two segments carry the local start time of the recording, which the
assembler turns into a per-session header.
"""

from __future__ import annotations

import re
from datetime import datetime

DELIMITER = "-"

_SESSION_ID_PATTERN = re.compile(r"^IETF\d+-[A-Za-z0-9\-]+-\d{8}-\d{4}$")

# Fixed English month names; strftime("%b") would follow the process locale.
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def is_valid_session_id(session_id: object) -> bool:
    """Return ``True`` if *session_id* matches ``IETF<n>-<NAME>-<YYYYMMDD>-<HHMM>``."""
    if not isinstance(session_id, str):
        return False
    return bool(_SESSION_ID_PATTERN.match(session_id))


def parse_session_timestamp(session_id: str) -> datetime | None:
    """Parse the start time encoded in the last two segments of *session_id*.

    Returns ``None`` when the segments are missing, have the wrong length,
    or do not form a real calendar date/time.
    """
    parts = session_id.split(DELIMITER)
    if len(parts) < 2:
        return None
    date_str, time_str = parts[-2], parts[-1]
    if len(date_str) != 8 or len(time_str) != 4:
        return None
    try:
        return datetime.strptime(f"{date_str}{time_str}", "%Y%m%d%H%M")
    except ValueError:
        return None


def format_session_header(session_id: str) -> str:
    """Return the Markdown date/time header for *session_id*, or ``""``.

    The time is local to the meeting venue, so no timezone is shown.
    """
    started = parse_session_timestamp(session_id)
    if started is None:
        return ""
    month = _MONTH_NAMES[started.month - 1]
    formatted = f"{started.day:02d} {month} {started.year} {started.hour:02d}:{started.minute:02d}"
    return f"**Session Date/Time:** {formatted}\n\n"
