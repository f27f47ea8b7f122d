"""GitHub Pages deployment of the assembled site.

Clones the pages branch into a scratch working directory, resets it to the
baseline tag (the commit holding the site layout and build workflow),
copies the assembled site into ``docs/``, commits and pushes.  The copy
merges into whatever the baseline already holds under ``docs/``; pages of
groups that left a manifest are removed from the site by the publisher at
assemble time, not here.

git is driven through :func:`asyncio.create_subprocess_exec`; any non-zero
exit becomes a :class:`PublishError` carrying the command's stderr.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Sequence
from pathlib import Path

import structlog

from auto_minutes.utils.errors import PublishError
from auto_minutes.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


class GitPagesDeployer:
    """Publishes a site directory to a git-hosted pages branch.

    Parameters
    ----------
    repo_url:
        Remote to clone and push, e.g. ``git@github.com:org/repo.git``.
    site_dir:
        Directory produced by the assemble stage.
    branch:
        Pages branch to clone and push.
    workdir:
        Scratch clone location; removed before cloning and after a push.
    baseline_tag:
        Tag to hard-reset the clone to before copying; empty to skip.
    docs_subdir:
        Directory inside the clone the site is served from.
    """

    def __init__(
        self,
        repo_url: str,
        site_dir: str | Path,
        branch: str = "gh-pages",
        workdir: str | Path = "gh-pages-repo",
        baseline_tag: str = "baseline",
        docs_subdir: str = "docs",
        collection_label: str = "IETF {collection_id}",
    ) -> None:
        self._repo_url = repo_url
        self._site_dir = Path(site_dir)
        self._branch = branch
        self._workdir = Path(workdir)
        self._baseline_tag = baseline_tag
        self._docs_subdir = docs_subdir
        self._label = collection_label

    def commit_message(self, collection_ids: Sequence[str]) -> str:
        labels = ", ".join(self._label.format(collection_id=cid) for cid in collection_ids)
        return f"Update minutes for {labels}" if labels else "Update minutes"

    async def deploy(self, collection_ids: Sequence[str], no_push: bool = False) -> Path:
        """Copy the site into the pages branch, commit, and push.

        Parameters
        ----------
        collection_ids:
            Meetings named in the commit message.
        no_push:
            Stop after committing and leave the clone in place for
            inspection.

        Returns
        -------
        Path
            The working clone (already removed when pushed).

        Raises
        ------
        PublishError
            If the site directory is missing or any git command fails.
        """
        if not self._site_dir.is_dir():
            raise PublishError(
                message=f"Site directory {self._site_dir} does not exist; run assemble first",
                provider_name=self.get_provider_name(),
            )

        await self._remove_workdir()
        try:
            await self._git(
                "clone", "-b", self._branch, "--single-branch",
                self._repo_url, str(self._workdir),
            )
            if self._baseline_tag:
                await self._git("reset", "--hard", self._baseline_tag, cwd=self._workdir)

            docs_dir = self._workdir / self._docs_subdir
            await asyncio.to_thread(shutil.copytree, self._site_dir, docs_dir, dirs_exist_ok=True)
            await self._git("add", self._docs_subdir, cwd=self._workdir)

            status = await self._git("status", "--porcelain", cwd=self._workdir)
            if not status.strip():
                logger.info("pages_unchanged", branch=self._branch)
            else:
                await self._git(
                    "commit", "-m", self.commit_message(collection_ids), cwd=self._workdir
                )
                logger.info(
                    "pages_committed", branch=self._branch, collections=list(collection_ids)
                )

            if no_push:
                logger.info("pages_push_skipped", workdir=str(self._workdir))
                return self._workdir

            await self._git("push", "origin", self._branch, cwd=self._workdir)
            logger.info("pages_pushed", repo=self._repo_url, branch=self._branch)
        except PublishError:
            await self._remove_workdir()
            raise
        except OSError as exc:
            await self._remove_workdir()
            raise PublishError(
                message=f"Deployment failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        await self._remove_workdir()
        return self._workdir

    def get_provider_name(self) -> str:
        return "git_pages"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _git(self, *args: str, cwd: Path | None = None) -> str:
        """Run one git command and return its stdout."""
        try:
            proc = await asyncio.create_subprocess_exec(
                "git", *args,
                cwd=str(cwd) if cwd else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise PublishError(
                message="git executable not found on PATH",
                provider_name=self.get_provider_name(),
            ) from exc
        stdout, stderr = await proc.communicate()

        if proc.returncode != 0:
            raise PublishError(
                message=f"git {args[0]} failed: {stderr.decode(errors='replace')[:500]}",
                provider_name=self.get_provider_name(),
            )
        logger.debug("git_command", command=args[0], cwd=str(cwd) if cwd else None)
        return stdout.decode(errors="replace")

    async def _remove_workdir(self) -> None:
        if self._workdir.exists():
            await asyncio.to_thread(shutil.rmtree, self._workdir)
