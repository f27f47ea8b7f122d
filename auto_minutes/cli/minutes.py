"""Command-line interface for the auto-minutes pipeline.

Usage::

    auto-minutes collect 118                 # fetch + generate + cache
    auto-minutes collect -s tls -m gemini 118
    auto-minutes assemble                    # rebuild site/ from the cache
    auto-minutes run -p 118                  # collect, assemble, deploy
    auto-minutes publish -n 118              # deploy, commit only
    auto-minutes status                      # what is cached; no network

``collect`` and ``run`` need network access and an API key for the chosen
model.  ``assemble``, ``status`` and ``publish`` work from the local cache
alone.  The exit code is non-zero only for fatal errors (storage, settings,
session listing, deployment); sessions without a transcript and failed
generations are reported in the summary but never fail the run.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Callable, Sequence

from auto_minutes.cli import factories
from auto_minutes.config.loader import load_config
from auto_minutes.config.settings import Settings
from auto_minutes.models.item import Item
from auto_minutes.models.pipeline import AssemblyReport, CollectReport
from auto_minutes.pipeline.driver import PipelineDriver
from auto_minutes.utils.errors import (
    ConfigurationError,
    PersistenceError,
    PublishError,
    SourceError,
)
from auto_minutes.utils.logging import configure_logging

# Errors that abort a command with exit code 1.
_FATAL_ERRORS = (PersistenceError, ConfigurationError, SourceError, PublishError)

_MODEL_CHOICES = ("claude", "openai", "gemini")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_collect_summary(report: CollectReport, label: str) -> str:
    """Render the per-group summary printed after a collect run."""
    lines = [f"Summary for {label}", "-" * 40]
    for summary in report.summaries:
        lines.append(
            f"  {summary.display_name}: {summary.processed} processed, "
            f"{summary.skipped} skipped, {summary.failed} failed"
        )
        for failure in summary.failures:
            lines.append(f"      {failure}")
    lines.append("")
    lines.append(
        f"Generated {report.generated} new minutes; "
        f"{len(report.manifest.groups) if report.manifest else 0} groups; "
        f"manifest {'written' if report.manifest_written else 'unchanged'}"
    )
    return "\n".join(lines)


def _format_assembly_summary(report: AssemblyReport) -> str:
    lines = [
        f"Assembled {len(report.collections)} meeting(s), "
        f"{report.groups_published} group page(s)"
    ]
    if report.skipped_collections:
        lines.append(f"  Skipped (no manifest): {', '.join(report.skipped_collections)}")
    if report.missing_artifacts:
        lines.append(f"  Missing from cache: {', '.join(report.missing_artifacts)}")
    return "\n".join(lines)


def _session_printer(verbose: bool) -> Callable[[Sequence[Item]], None]:
    """Return a callback printing the session listing as soon as it is fetched."""

    def print_sessions(items: Sequence[Item]) -> None:
        print(f"Found {len(items)} sessions", flush=True)
        if verbose:
            print(json.dumps([item.model_dump() for item in items], indent=2), flush=True)

    return print_sessions


def _parse_meetings(values: list[str]) -> list[str] | None:
    """Return the meeting numbers as canonical strings, or ``None`` if any is invalid."""
    meetings: list[str] = []
    for value in values:
        try:
            meetings.append(str(int(value, 10)))
        except ValueError:
            return None
    return meetings


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_collect(args: argparse.Namespace, app_settings: Settings) -> int:
    meeting = args.meetings[0]
    backend = args.model or app_settings.llm_backend
    label = app_settings.collection_label.format(collection_id=meeting)
    print(f"Processing {label} meeting transcripts using {backend}...")

    cache, manifest_store = await factories.build_storage(app_settings)
    async with factories.build_http_client(app_settings) as http_client:
        collect_stage = factories.build_collect_stage(
            app_settings, http_client, cache, manifest_store, backend=backend
        )
        driver = PipelineDriver(collect_stage=collect_stage)
        report = await driver.collect(
            meeting, name_filter=args.session, on_items=_session_printer(args.verbose)
        )

    print()
    print(_format_collect_summary(report, label))
    return 0


async def _handle_assemble(args: argparse.Namespace, app_settings: Settings) -> int:
    cache, manifest_store = await factories.build_storage(app_settings)
    driver = PipelineDriver(
        assemble_stage=factories.build_assemble_stage(app_settings, cache, manifest_store)
    )
    report = await driver.assemble(args.meetings or None)
    print(_format_assembly_summary(report))
    return 0


async def _handle_run(args: argparse.Namespace, app_settings: Settings) -> int:
    meeting = args.meetings[0]
    backend = args.model or app_settings.llm_backend
    label = app_settings.collection_label.format(collection_id=meeting)
    print(f"Processing {label} meeting transcripts using {backend}...")

    cache, manifest_store = await factories.build_storage(app_settings)
    async with factories.build_http_client(app_settings) as http_client:
        driver = PipelineDriver(
            collect_stage=factories.build_collect_stage(
                app_settings, http_client, cache, manifest_store, backend=backend
            ),
            assemble_stage=factories.build_assemble_stage(app_settings, cache, manifest_store),
        )
        collect_report, assembly_report = await driver.run(
            meeting, name_filter=args.session, on_items=_session_printer(args.verbose)
        )

    print()
    print(_format_collect_summary(collect_report, label))
    print(_format_assembly_summary(assembly_report))

    if args.publish:
        print("\nPublishing to GitHub Pages...")
        workdir = await factories.build_deployer(app_settings).deploy(
            [meeting], no_push=args.no_push
        )
        if args.no_push:
            print(f"Skipping git push; repository left in: {workdir}")
        else:
            print("Successfully published to GitHub Pages!")
    return 0


async def _handle_publish(args: argparse.Namespace, app_settings: Settings) -> int:
    meetings = args.meetings
    if not meetings:
        cache, manifest_store = await factories.build_storage(app_settings)
        meetings = [
            cid for cid in await cache.list_collections() if await manifest_store.exists(cid)
        ]
    workdir = await factories.build_deployer(app_settings).deploy(meetings, no_push=args.no_push)
    if args.no_push:
        print(f"Skipping git push; repository left in: {workdir}")
    else:
        print("Successfully published to GitHub Pages!")
    return 0


async def _handle_status(args: argparse.Namespace, app_settings: Settings) -> int:
    """Show what is cached per meeting.  Reads local state only."""
    config = load_config(settings=app_settings)
    storage = config["storage"]
    location = storage["sqlite_path"] if storage["backend"] == "sqlite" else storage["cache_dir"]
    print(f"Storage: {storage['backend']} ({location})")
    print(f"LLM backends configured: {', '.join(config['llm']['available_backends']) or 'none'}")
    print()

    cache, manifest_store = await factories.build_storage(app_settings)
    meetings = args.meetings or await cache.list_collections()
    if not meetings:
        print("Cache is empty.")
        return 0

    for meeting in meetings:
        keys = await cache.list_keys(meeting)
        label = app_settings.collection_label.format(collection_id=meeting)
        if await manifest_store.exists(meeting):
            manifest = await manifest_store.load(meeting)
            manifest_info = (
                f"manifest {manifest.generated_at.isoformat()}, {len(manifest.groups)} groups"
            )
        else:
            manifest_info = "no manifest"
        print(f"  {label:<12} {len(keys):>4} cached sessions  |  {manifest_info}")
    return 0


_HANDLERS = {
    "collect": _handle_collect,
    "assemble": _handle_assemble,
    "run": _handle_run,
    "publish": _handle_publish,
    "status": _handle_status,
}


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_collect_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("meetings", nargs=1, metavar="meeting", help="IETF meeting number")
    parser.add_argument(
        "-s",
        "--session",
        default=None,
        help="Process only sessions matching this name (case-insensitive partial match)",
    )
    parser.add_argument(
        "-m",
        "--model",
        choices=_MODEL_CHOICES,
        default=None,
        help="LLM used for generating minutes (default: LLM_BACKEND or claude)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print the session list as JSON"
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the auto-minutes CLI."""
    parser = argparse.ArgumentParser(
        prog="auto-minutes",
        description="Generate meeting minutes from IETF session transcripts.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Pipeline commands")

    collect_parser = subparsers.add_parser(
        "collect", help="Fetch transcripts, generate and cache minutes"
    )
    _add_collect_options(collect_parser)

    assemble_parser = subparsers.add_parser(
        "assemble", help="Rebuild the site from cached minutes (no network)"
    )
    assemble_parser.add_argument(
        "meetings", nargs="*", metavar="meeting", help="Meetings to assemble (default: all)"
    )

    run_parser = subparsers.add_parser("run", help="Collect one meeting, then assemble")
    _add_collect_options(run_parser)
    run_parser.add_argument(
        "-p", "--publish", action="store_true", help="Publish to GitHub Pages (gh-pages branch)"
    )
    run_parser.add_argument(
        "-n", "--no-push", action="store_true", help="Skip git push (only clone, copy, and commit)"
    )

    publish_parser = subparsers.add_parser(
        "publish", help="Deploy the assembled site to GitHub Pages"
    )
    publish_parser.add_argument(
        "-n", "--no-push", action="store_true", help="Skip git push (only clone, copy, and commit)"
    )
    publish_parser.add_argument(
        "meetings", nargs="*", metavar="meeting", help="Meetings named in the commit message"
    )

    status_parser = subparsers.add_parser("status", help="Show cached meetings and manifests")
    status_parser.add_argument(
        "meetings", nargs="*", metavar="meeting", help="Meetings to show (default: all)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses the subcommand, validates meeting numbers, loads Settings from
    the environment / .env file and dispatches to the handler.  Fatal
    pipeline errors are printed to stderr and exit with status 1.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    meetings = _parse_meetings(args.meetings)
    if meetings is None:
        print("Error: Meeting number must be a valid integer", file=sys.stderr)
        sys.exit(1)
    args.meetings = meetings

    app_settings = Settings()
    configure_logging(
        log_level=app_settings.log_level,
        json_output=app_settings.app_env == "production",
    )

    try:
        exit_code = asyncio.run(_HANDLERS[args.command](args, app_settings))
    except _FATAL_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
