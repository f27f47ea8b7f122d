"""Static-site publisher writing Markdown pages for an Eleventy build.

Layout under ``site_dir``::

    index.md                      root index, one link per meeting
    ietf118/index.md              meeting index, one link per working group
    ietf118/tls.md                combined minutes with YAML front matter
    ietf118/tls.txt               the same minutes without front matter

The ``.txt`` copies are passed through verbatim by the site build so the
raw minutes can be fetched without the page layout.  Every file is written
atomically, and pages carry no timestamps, so re-assembling unchanged
state produces byte-identical output.

Page names are slugs of the group name.  Within one meeting each group gets
its own slug: when two names slugify alike (``"Foo Bar"`` and ``"foo-bar"``)
the later one gets a ``-2``, ``-3`` ... suffix in publishing order, which is
manifest order and therefore stable across runs.  Publishing a meeting's
index removes group pages that were not published in the same run.
"""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Sequence
from pathlib import Path

import structlog
import yaml

from auto_minutes.interfaces.publisher import IPublisher
from auto_minutes.utils.atomic_io import atomic_write_text
from auto_minutes.utils.errors import PublishError
from auto_minutes.utils.logging import get_logger
from auto_minutes.utils.text_normalizer import slugify

logger: structlog.BoundLogger = get_logger(__name__)

INDEX_FILENAME = "index.md"
_PAGE_SUFFIXES = (".md", ".txt")


def page_slug(display_name: str) -> str:
    """Return the base page slug for *display_name*.

    Names without a single ASCII letter or digit (``"会議"``) get
    ``group-<first 8 hex digits of the name's SHA-1>``.
    """
    slug = slugify(display_name)
    if slug:
        return slug
    digest = hashlib.sha1(display_name.encode("utf-8")).hexdigest()[:8]
    return f"group-{digest}"


class MarkdownSitePublisher(IPublisher):
    """Writes assembled minutes as Markdown pages under *site_dir*.

    Parameters
    ----------
    site_dir:
        Root of the static-site source tree.
    collection_prefix:
        Prefix of each meeting directory (``ietf`` gives ``ietf118/``).
    collection_label:
        ``str.format`` template for a meeting's human-readable name.
    layout:
        Template name written into every page's front matter.
    """

    def __init__(
        self,
        site_dir: str | Path,
        collection_prefix: str = "ietf",
        collection_label: str = "IETF {collection_id}",
        layout: str = "minutes.njk",
    ) -> None:
        self._site_dir = Path(site_dir)
        self._prefix = collection_prefix
        self._label = collection_label
        self._layout = layout
        # collection id -> display name -> slug, in publishing order
        self._slugs: dict[str, dict[str, str]] = {}

    @property
    def site_dir(self) -> Path:
        return self._site_dir

    def collection_dir(self, collection_id: str) -> Path:
        return self._site_dir / f"{self._prefix}{collection_id}"

    def collection_label(self, collection_id: str) -> str:
        return self._label.format(collection_id=collection_id)

    def resolve_slug(self, collection_id: str, display_name: str) -> str:
        """Return the slug of *display_name*, unique within *collection_id*."""
        assigned = self._slugs.setdefault(collection_id, {})
        if display_name in assigned:
            return assigned[display_name]

        base = page_slug(display_name)
        taken = set(assigned.values())
        slug, suffix = base, 2
        # "index" would overwrite the meeting index page.
        while slug in taken or slug == "index":
            slug = f"{base}-{suffix}"
            suffix += 1
        assigned[display_name] = slug
        return slug

    def page_path(self, collection_id: str, display_name: str) -> Path:
        """Return the ``.md`` path of a group's page."""
        slug = self.resolve_slug(collection_id, display_name)
        return self.collection_dir(collection_id) / f"{slug}.md"

    # ------------------------------------------------------------------
    # IPublisher implementation
    # ------------------------------------------------------------------

    async def publish_group(
        self,
        collection_id: str,
        display_name: str,
        combined_text: str,
        external_refs: Sequence[str],
    ) -> None:
        page = self.page_path(collection_id, display_name)
        front_matter = {
            "layout": self._layout,
            "title": display_name,
            "collection": self.collection_label(collection_id),
            "recordings": list(external_refs),
        }
        body = combined_text if combined_text.endswith("\n") else combined_text + "\n"
        await asyncio.to_thread(
            self._write, page, self._render_front_matter(front_matter) + "\n" + body
        )
        await asyncio.to_thread(self._write, page.with_suffix(".txt"), body)
        logger.info(
            "group_published",
            collection_id=collection_id,
            display_name=display_name,
            path=str(page),
        )

    async def publish_collection_index(
        self, collection_id: str, display_names: Sequence[str]
    ) -> None:
        label = self.collection_label(collection_id)
        lines = [
            self._render_front_matter({"layout": self._layout, "title": label}),
            "# Meeting Minutes Index",
            "",
            label,
            "",
            "## Sessions",
            "",
        ]
        for name in display_names:
            lines.append(f"- [{name}](./{self.resolve_slug(collection_id, name)}.md)")
        directory = self.collection_dir(collection_id)
        await asyncio.to_thread(self._write, directory / INDEX_FILENAME, "\n".join(lines) + "\n")
        await asyncio.to_thread(self._prune_stale_pages, collection_id)
        # Slugs are resolved afresh by the next run, in its manifest order.
        self._slugs.pop(collection_id, None)
        logger.info(
            "collection_index_published", collection_id=collection_id, groups=len(display_names)
        )

    async def publish_root_index(self, collection_ids: Sequence[str]) -> None:
        lines = [
            self._render_front_matter({"layout": self._layout, "title": "Meeting Minutes"}),
            "# Meeting Minutes",
            "",
        ]
        for collection_id in collection_ids:
            lines.append(
                f"- [{self.collection_label(collection_id)}](./{self._prefix}{collection_id}/)"
            )
        await asyncio.to_thread(
            self._write, self._site_dir / INDEX_FILENAME, "\n".join(lines) + "\n"
        )
        logger.info("root_index_published", collections=len(collection_ids))

    def get_provider_name(self) -> str:
        return "markdown_site"

    # ------------------------------------------------------------------
    # Helpers (blocking; run via asyncio.to_thread)
    # ------------------------------------------------------------------

    @staticmethod
    def _render_front_matter(data: dict) -> str:
        dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
        return f"---\n{dumped}---\n"

    def _write(self, path: Path, text: str) -> None:
        try:
            atomic_write_text(path, text)
        except OSError as exc:
            raise PublishError(
                message=f"Could not write {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _prune_stale_pages(self, collection_id: str) -> None:
        """Delete group pages of *collection_id* that no group resolved to."""
        keep = {INDEX_FILENAME}
        for slug in self._slugs.get(collection_id, {}).values():
            keep.update(f"{slug}{suffix}" for suffix in _PAGE_SUFFIXES)

        directory = self.collection_dir(collection_id)
        try:
            for path in sorted(directory.iterdir()):
                if path.is_file() and path.suffix in _PAGE_SUFFIXES and path.name not in keep:
                    path.unlink()
                    logger.info("stale_page_removed", collection_id=collection_id, path=str(path))
        except OSError as exc:
            raise PublishError(
                message=f"Could not prune {directory}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
