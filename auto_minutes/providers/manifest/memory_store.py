"""In-memory manifest store used by tests."""

from __future__ import annotations

from auto_minutes.interfaces.manifest_store import IManifestStore
from auto_minutes.models.item import GroupManifest
from auto_minutes.utils.errors import ManifestMissingError


class MemoryManifestStore(IManifestStore):
    """Keeps manifests in a dict; counts saves so tests can assert on churn."""

    def __init__(self) -> None:
        self._manifests: dict[str, GroupManifest] = {}
        self.save_count = 0

    async def save(self, collection_id: str, manifest: GroupManifest) -> None:
        self._manifests[str(collection_id)] = manifest
        self.save_count += 1

    async def load(self, collection_id: str) -> GroupManifest:
        try:
            return self._manifests[str(collection_id)]
        except KeyError as exc:
            raise ManifestMissingError(
                message=f"No manifest for collection {collection_id}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def exists(self, collection_id: str) -> bool:
        return str(collection_id) in self._manifests

    def get_provider_name(self) -> str:
        return "memory"
