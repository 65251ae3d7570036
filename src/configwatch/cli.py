"""Command-line interface for configwatch."""

from __future__ import annotations

import argparse
import asyncio
import functools
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.table import Table

from configwatch.config import Settings, load_settings
from configwatch.logging import setup_logging
from configwatch.watcher import (
    ActiveRegistry,
    ConfigDiff,
    ConfigPolicy,
    ConfigWatcher,
    ReloadPoller,
    load_config_detail,
)

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="configwatch",
        description="Reconcile config source directories and report hot-reload diffs",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=None,
        help="Increase verbosity (can be repeated)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (merged over system and user settings)",
    )

    subparsers = parser.add_subparsers(dest="mode", help="Operating mode")

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan once and print the diff against an empty registry",
    )
    scan_parser.add_argument(
        "dirs",
        nargs="*",
        type=Path,
        help="Source directories (default: watch.source_dirs from settings)",
    )

    watch_parser = subparsers.add_parser(
        "watch",
        help="Scan periodically, applying each diff to an in-memory registry",
    )
    watch_parser.add_argument(
        "dirs",
        nargs="*",
        type=Path,
        help="Source directories (default: watch.source_dirs from settings)",
    )
    watch_parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between scans (default: watch.poll_interval)",
    )
    watch_parser.add_argument(
        "--iterations",
        type=int,
        help="Stop after this many scans (default: run until interrupted)",
    )

    return parser


def build_watcher(
    settings: Settings,
    registry: ActiveRegistry,
    dirs: Sequence[Path] = (),
) -> ConfigWatcher:
    """Create a watcher over ``dirs`` (or the configured source dirs)."""
    loader = functools.partial(
        load_config_detail,
        extensions=settings.watch.extensions,
        reserved_names=settings.watch.reserved_names,
    )
    policy = ConfigPolicy.for_registry(registry, loader=loader)
    sources = list(dirs) or [Path(d) for d in settings.watch.source_dirs]
    return ConfigWatcher(policy, sources, reserved_names=settings.watch.reserved_names)


def render_diff(diff: ConfigDiff, title: str = "Config diff") -> Table:
    """Render a diff as a table of (change, name, source dir)."""
    table = Table(title=title)
    table.add_column("Change", style="bold")
    table.add_column("Config")
    table.add_column("Source")

    for entity in diff.added:
        table.add_row("[green]added[/green]", entity.name, entity.source_dir)
    for entity in diff.modified:
        table.add_row("[yellow]modified[/yellow]", entity.name, entity.source_dir)
    for name in diff.removed:
        table.add_row("[red]removed[/red]", name, "")
    return table


def _run_scan(settings: Settings, dirs: Sequence[Path]) -> int:
    watcher = build_watcher(settings, ActiveRegistry(), dirs)
    if not watcher.source_dirs:
        console.print("[red]No source directories given or configured[/red]")
        return 1

    diff = watcher.scan_once()
    if diff.is_empty():
        console.print("No enabled configs found.")
    else:
        console.print(render_diff(diff))

    skipped = watcher.last_report.directories_skipped
    if skipped:
        console.print(f"[yellow]{skipped} source directories skipped[/yellow]")
    return 0


async def _run_watch(
    settings: Settings,
    dirs: Sequence[Path],
    interval: float,
    iterations: int | None,
) -> int:
    registry = ActiveRegistry()
    watcher = build_watcher(settings, registry, dirs)
    if not watcher.source_dirs:
        console.print("[red]No source directories given or configured[/red]")
        return 1

    def apply(diff: ConfigDiff) -> None:
        registry.apply(diff)
        console.print(render_diff(diff, title=f"Scan {poller.scans}"))
        console.print(f"{len(registry)} configs active")

    poller = ReloadPoller(watcher, apply, poll_interval=interval)
    console.print(
        f"Watching {len(watcher.source_dirs)} directories every {interval:.1f}s"
    )

    if iterations is not None:
        for i in range(iterations):
            if i:
                await asyncio.sleep(interval)
            poller.run_once()
        return 0

    async with poller:
        while poller.is_running():
            await asyncio.sleep(interval)
    return 0


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.mode is None:
        parser.print_help()
        return 1

    try:
        settings = load_settings(parsed.config)
    except ValueError as e:
        console.print(f"[red]Invalid settings: {e}[/red]")
        return 1

    if parsed.verbose is not None:
        settings.logging.verbose = min(4, 1 + parsed.verbose)
    setup_logging(settings.logging)

    if parsed.mode == "scan":
        return _run_scan(settings, parsed.dirs)
    elif parsed.mode == "watch":
        interval = parsed.interval or settings.watch.poll_interval
        try:
            return asyncio.run(_run_watch(settings, parsed.dirs, interval, parsed.iterations))
        except KeyboardInterrupt:
            return 0
    else:
        parser.print_help()
        return 1
