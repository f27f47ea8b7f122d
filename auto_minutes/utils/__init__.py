"""Utility modules for auto-minutes.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at
  AutoMinutesError; each pipeline concern raises its own subclass so callers
  can tell availability gaps from fatal storage failures.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **session_ids** -- Meetecho session-id validation and timestamp parsing
  for the per-session date/time header.
- **text_normalizer** -- slug generation and collection / group ordering.
"""

from auto_minutes.utils.errors import (
    ArtifactNotFoundError,
    AutoMinutesError,
    ConfigurationError,
    GenerationError,
    LLMError,
    ManifestMissingError,
    PersistenceError,
    PublishError,
    SourceError,
    UnavailableError,
)
from auto_minutes.utils.logging import configure_logging, get_logger
from auto_minutes.utils.session_ids import (
    format_session_header,
    is_valid_session_id,
    parse_session_timestamp,
)
from auto_minutes.utils.text_normalizer import (
    collection_sort_key,
    slugify,
    sort_collection_ids,
    sort_display_names,
)

__all__ = [
    "ArtifactNotFoundError",
    "AutoMinutesError",
    "ConfigurationError",
    "GenerationError",
    "LLMError",
    "ManifestMissingError",
    "PersistenceError",
    "PublishError",
    "SourceError",
    "UnavailableError",
    "collection_sort_key",
    "configure_logging",
    "format_session_header",
    "get_logger",
    "is_valid_session_id",
    "parse_session_timestamp",
    "slugify",
    "sort_collection_ids",
    "sort_display_names",
]
