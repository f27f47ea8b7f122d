"""Session sources.

Two scrapers for the same meeting data, selected by ``ITEM_SOURCE``:
    - MeetechoItemSource     -- the Meetecho recordings table (default)
    - ProceedingsItemSource  -- the datatracker proceedings page

Both are wrapped in ValidatingItemSource by the CLI factory.
"""

from auto_minutes.providers.source.meetecho_provider import MeetechoItemSource
from auto_minutes.providers.source.proceedings_provider import ProceedingsItemSource
from auto_minutes.providers.source.validating_source import (
    ValidatingItemSource,
    split_valid_items,
)

__all__ = [
    "MeetechoItemSource",
    "ProceedingsItemSource",
    "ValidatingItemSource",
    "split_valid_items",
]
