"""Session-id validation wrapper for any :class:`IItemSource`.

Session ids double as cache keys and carry the recording timestamp, so a
scraped row whose id does not look like ``IETF<n>-<NAME>-<YYYYMMDD>-<HHMM>``
is dropped before it reaches the pipeline.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from auto_minutes.interfaces.item_source import IItemSource
from auto_minutes.models.item import Item
from auto_minutes.utils.logging import get_logger
from auto_minutes.utils.session_ids import is_valid_session_id


class ValidationStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    valid: int
    invalid: int

    @property
    def validation_rate(self) -> str:
        if self.total == 0:
            return "0%"
        return f"{self.valid / self.total * 100:.1f}%"


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid_items: list[Item] = Field(default_factory=list)
    invalid_items: list[Item] = Field(default_factory=list)
    stats: ValidationStats


def split_valid_items(items: list[Item]) -> ValidationResult:
    """Partition *items* by whether their id is a well-formed session id."""
    valid = [item for item in items if is_valid_session_id(item.item_id)]
    invalid = [item for item in items if not is_valid_session_id(item.item_id)]
    return ValidationResult(
        valid_items=valid,
        invalid_items=invalid,
        stats=ValidationStats(total=len(items), valid=len(valid), invalid=len(invalid)),
    )


class ValidatingItemSource(IItemSource):
    """Wraps another source and drops items with malformed session ids."""

    def __init__(self, inner: IItemSource) -> None:
        self._inner = inner
        self._logger = get_logger(__name__)

    async def list_items(self, collection_id: str) -> list[Item]:
        result = split_valid_items(await self._inner.list_items(collection_id))
        if result.invalid_items:
            self._logger.warning(
                "invalid_session_ids_skipped",
                collection_id=collection_id,
                invalid=[f"{i.display_name}: {i.item_id}" for i in result.invalid_items],
                validation_rate=result.stats.validation_rate,
            )
        return result.valid_items

    def get_provider_name(self) -> str:
        return self._inner.get_provider_name()
