"""Custom exception hierarchy for auto-minutes.

All application exceptions inherit from :class:`AutoMinutesError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service or storage backend (e.g. "anthropic", "meetecho", "file")
caused the failure.

The hierarchy is organized by pipeline concern:

    AutoMinutesError  (base -- catch-all for any auto-minutes error)
    +-- UnavailableError        (raw transcript absent -- not a fault)
    +-- GenerationError         (minutes generation failed for one item)
    +-- LLMError                (any LLM API call failure)
    +-- SourceError             (session listing could not be fetched)
    +-- PersistenceError        (cache / manifest write or parse failure)
    +-- ArtifactNotFoundError   (cache read of an absent key)
    +-- ManifestMissingError    (manifest never saved for a collection)
    +-- ConfigurationError      (startup / missing config)
    +-- PublishError            (site rendering or deployment failure)

Only PersistenceError, ConfigurationError, SourceError and PublishError are
fatal to a run.  UnavailableError and GenerationError exclude one item and
the run carries on.
"""


class AutoMinutesError(Exception):
    """Base exception for all auto-minutes errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[anthropic] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Collect/Generate: per-item errors
# ---------------------------------------------------------------------------

class UnavailableError(AutoMinutesError):
    """Raised when the raw transcript for an item cannot be fetched.

    This is an availability condition, not a fault: the collect stage
    drops the item and moves on.
    """

    def __init__(
        self,
        message: str = "Transcript is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GenerationError(AutoMinutesError):
    """Raised when the minutes generator fails for one transcript."""

    def __init__(
        self,
        message: str = "Minutes generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(AutoMinutesError):
    """Raised when an LLM API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SourceError(AutoMinutesError):
    """Raised when the session list for a meeting cannot be retrieved."""

    def __init__(
        self,
        message: str = "Session listing failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------

class PersistenceError(AutoMinutesError):
    """Raised when an artifact or manifest cannot be written or parsed.

    Always fatal: a run that silently drops writes cannot mark itself
    successful.
    """

    def __init__(
        self,
        message: str = "Persistence operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ArtifactNotFoundError(AutoMinutesError):
    """Raised by ``IArtifactCache.get`` when no artifact exists for the key."""

    def __init__(
        self,
        message: str = "Artifact not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ManifestMissingError(AutoMinutesError):
    """Raised by ``IManifestStore.load`` when no manifest was ever saved."""

    def __init__(
        self,
        message: str = "Manifest not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration / publishing errors
# ---------------------------------------------------------------------------

class ConfigurationError(AutoMinutesError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PublishError(AutoMinutesError):
    """Raised when rendering the site or deploying it fails."""

    def __init__(
        self,
        message: str = "Publishing failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
