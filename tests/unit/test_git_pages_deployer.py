"""Unit tests for GitPagesDeployer.

git itself is never invoked: ``_git`` is replaced by a fake that records
commands and creates the clone directory.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from auto_minutes.providers.publish.git_pages_deployer import GitPagesDeployer
from auto_minutes.utils.errors import PublishError


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    site = tmp_path / "site"
    (site / "ietf118").mkdir(parents=True)
    (site / "index.md").write_text("# Meeting Minutes\n", encoding="utf-8")
    (site / "ietf118" / "tls.md").write_text("# TLS\n", encoding="utf-8")
    return site


def _fake_git(calls: list[tuple[str, ...]], status: str = " M docs/index.md\n", fail_on: str = ""):
    async def fake(*args: str, cwd: Path | None = None) -> str:
        calls.append(args)
        if args[0] == fail_on:
            raise PublishError(message=f"git {args[0]} failed", provider_name="git_pages")
        if args[0] == "clone":
            Path(args[-1]).mkdir(parents=True)
        if args[0] == "status":
            return status
        return ""

    return fake


def _deployer(site_dir: Path, tmp_path: Path) -> GitPagesDeployer:
    return GitPagesDeployer(
        "git@example.test:org/minutes.git", site_dir, workdir=tmp_path / "clone"
    )


class TestGitPagesDeployer:
    def test_commit_message(self, tmp_path: Path) -> None:
        deployer = GitPagesDeployer("url", tmp_path)
        assert deployer.commit_message(["118", "119"]) == "Update minutes for IETF 118, IETF 119"
        assert deployer.commit_message([]) == "Update minutes"

    @pytest.mark.asyncio
    async def test_missing_site_raises(self, tmp_path: Path) -> None:
        deployer = _deployer(tmp_path / "nope", tmp_path)
        with pytest.raises(PublishError, match="run assemble first"):
            await deployer.deploy(["118"])

    @pytest.mark.asyncio
    async def test_deploy_commits_and_pushes(self, site_dir: Path, tmp_path: Path) -> None:
        calls: list[tuple[str, ...]] = []
        deployer = _deployer(site_dir, tmp_path)

        with patch.object(deployer, "_git", new=AsyncMock(side_effect=_fake_git(calls))):
            workdir = await deployer.deploy(["118"])

        assert [c[0] for c in calls] == ["clone", "reset", "add", "status", "commit", "push"]
        assert calls[0][:4] == ("clone", "-b", "gh-pages", "--single-branch")
        assert calls[1] == ("reset", "--hard", "baseline")
        assert calls[4] == ("commit", "-m", "Update minutes for IETF 118")
        assert calls[5] == ("push", "origin", "gh-pages")
        assert not workdir.exists()

    @pytest.mark.asyncio
    async def test_no_push_keeps_clone(self, site_dir: Path, tmp_path: Path) -> None:
        calls: list[tuple[str, ...]] = []
        deployer = _deployer(site_dir, tmp_path)

        with patch.object(deployer, "_git", new=AsyncMock(side_effect=_fake_git(calls))):
            workdir = await deployer.deploy(["118"], no_push=True)

        assert "push" not in [c[0] for c in calls]
        assert (workdir / "docs" / "ietf118" / "tls.md").read_text(encoding="utf-8") == "# TLS\n"

    @pytest.mark.asyncio
    async def test_unchanged_site_skips_commit(self, site_dir: Path, tmp_path: Path) -> None:
        calls: list[tuple[str, ...]] = []
        deployer = _deployer(site_dir, tmp_path)

        with patch.object(deployer, "_git", new=AsyncMock(side_effect=_fake_git(calls, status=""))):
            await deployer.deploy(["118"])

        assert "commit" not in [c[0] for c in calls]
        assert calls[-1][0] == "push"

    @pytest.mark.asyncio
    async def test_failed_push_removes_clone(self, site_dir: Path, tmp_path: Path) -> None:
        calls: list[tuple[str, ...]] = []
        deployer = _deployer(site_dir, tmp_path)

        with patch.object(
            deployer, "_git", new=AsyncMock(side_effect=_fake_git(calls, fail_on="push"))
        ):
            with pytest.raises(PublishError):
                await deployer.deploy(["118"])

        assert not (tmp_path / "clone").exists()


class TestGitCommand:
    @pytest.mark.asyncio
    async def test_missing_git_executable(self, tmp_path: Path) -> None:
        deployer = GitPagesDeployer("url", tmp_path)
        with patch(
            "auto_minutes.providers.publish.git_pages_deployer.asyncio.create_subprocess_exec",
            side_effect=FileNotFoundError("git"),
        ):
            with pytest.raises(PublishError, match="git executable not found"):
                await deployer._git("status")

    @pytest.mark.asyncio
    async def test_non_zero_exit_carries_stderr(self, tmp_path: Path) -> None:
        proc = MagicMock(returncode=128)
        proc.communicate = AsyncMock(return_value=(b"", b"fatal: repository not found"))
        deployer = GitPagesDeployer("url", tmp_path)

        with patch(
            "auto_minutes.providers.publish.git_pages_deployer.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            with pytest.raises(PublishError, match="repository not found"):
                await deployer._git("clone", "url", "dir")

    @pytest.mark.asyncio
    async def test_success_returns_stdout(self, tmp_path: Path) -> None:
        proc = MagicMock(returncode=0)
        proc.communicate = AsyncMock(return_value=(b" M docs/index.md\n", b""))
        deployer = GitPagesDeployer("url", tmp_path)

        with patch(
            "auto_minutes.providers.publish.git_pages_deployer.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            assert await deployer._git("status", "--porcelain") == " M docs/index.md\n"
