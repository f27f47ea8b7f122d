"""Unit tests for the auto-minutes CLI.

Each test runs in an empty working directory with storage and site paths
pointed at ``tmp_path`` through environment variables.  Network-facing
collaborators are replaced by fakes by patching
``factories.build_collect_stage``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from auto_minutes.cli import factories, minutes
from auto_minutes.pipeline.collector import CollectStage

_API_KEY_VARS = ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY", "LLM_BACKEND")


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for var in _API_KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("SITE_DIR", str(tmp_path / "site"))
    monkeypatch.setenv("APP_ENV", "development")
    # Cached loggers would keep writing to a previous test's captured stderr.
    monkeypatch.setattr(minutes, "configure_logging", lambda **kwargs: None)
    return tmp_path


@pytest.fixture
def fake_collect(monkeypatch, sample_items, source_factory, fetcher_factory, generator_factory):
    """Route collect/run through fakes instead of Meetecho and an LLM."""

    def build(settings, http_client, cache, manifest_store, backend=None):
        return CollectStage(
            item_source=source_factory(sample_items),
            fetcher=fetcher_factory(),
            generator=generator_factory(),
            cache=cache,
            manifest_store=manifest_store,
        )

    monkeypatch.setattr(factories, "build_collect_stage", build)


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        minutes.main(argv)
    return exc_info.value.code


# ======================================================================
# Argument handling
# ======================================================================


class TestArguments:
    def test_no_command_prints_help(self, workspace: Path, capsys) -> None:
        assert _run([]) == 1
        assert "usage: auto-minutes" in capsys.readouterr().out

    def test_invalid_meeting_number(self, workspace: Path, capsys) -> None:
        assert _run(["collect", "abc"]) == 1
        assert "Meeting number must be a valid integer" in capsys.readouterr().err

    def test_parser_collect_options(self) -> None:
        args = minutes._build_parser().parse_args(["collect", "-s", "tls", "-m", "gemini", "118"])
        assert args.meetings == ["118"]
        assert args.session == "tls"
        assert args.model == "gemini"

    def test_parser_rejects_unknown_model(self) -> None:
        with pytest.raises(SystemExit):
            minutes._build_parser().parse_args(["collect", "-m", "llama", "118"])

    def test_parse_meetings_canonicalises(self) -> None:
        assert minutes._parse_meetings(["0118", "7"]) == ["118", "7"]
        assert minutes._parse_meetings(["1.5"]) is None


# ======================================================================
# Commands
# ======================================================================


class TestCommands:
    def test_collect_without_api_key_is_fatal(self, workspace: Path, capsys) -> None:
        assert _run(["collect", "123"]) == 1
        assert "ANTHROPIC_API_KEY not found" in capsys.readouterr().err

    def test_status_on_empty_cache(self, workspace: Path, capsys) -> None:
        assert _run(["status"]) == 0
        out = capsys.readouterr().out
        assert "Storage: file" in out
        assert "Cache is empty." in out

    def test_collect_then_assemble(self, workspace: Path, fake_collect, capsys) -> None:
        assert _run(["collect", "123"]) == 0
        out = capsys.readouterr().out
        assert "Found 3 sessions" in out
        assert "TLS: 2 processed, 0 skipped, 0 failed" in out
        assert "Generated 3 new minutes; 2 groups; manifest written" in out
        assert (workspace / "cache" / "123" / "manifest.json").exists()

        assert _run(["assemble"]) == 0
        assert "Assembled 1 meeting(s), 2 group page(s)" in capsys.readouterr().out
        assert (workspace / "site" / "ietf123" / "tls.md").exists()
        assert (workspace / "site" / "index.md").exists()

    def test_second_collect_uses_cache(self, workspace: Path, fake_collect, capsys) -> None:
        _run(["collect", "123"])
        capsys.readouterr()

        assert _run(["collect", "123"]) == 0
        assert "Generated 0 new minutes; 2 groups; manifest unchanged" in capsys.readouterr().out

    def test_run_assembles(self, workspace: Path, fake_collect, capsys) -> None:
        assert _run(["run", "-s", "quic", "123"]) == 0
        out = capsys.readouterr().out
        assert "Generated 1 new minutes" in out
        assert (workspace / "site" / "ietf123" / "quic.md").exists()
        assert not (workspace / "site" / "ietf123" / "tls.md").exists()

    def test_status_lists_cached_meeting(self, workspace: Path, fake_collect, capsys) -> None:
        _run(["collect", "123"])
        capsys.readouterr()

        assert _run(["status"]) == 0
        out = capsys.readouterr().out
        assert "IETF 123" in out
        assert "3 cached sessions" in out
        assert "2 groups" in out

    def test_publish_without_site_is_fatal(self, workspace: Path, capsys) -> None:
        assert _run(["publish", "-n", "123"]) == 1
        assert "run assemble first" in capsys.readouterr().err

    def test_session_listing_printed_before_filter_error(
        self, workspace: Path, fake_collect, capsys
    ) -> None:
        assert _run(["collect", "-v", "-s", "nomatch", "123"]) == 1
        captured = capsys.readouterr()
        assert "Found 3 sessions" in captured.out
        assert '"item_id": "IETF123-TLS-20250722-0930"' in captured.out
        assert 'No sessions found matching "nomatch"' in captured.err
