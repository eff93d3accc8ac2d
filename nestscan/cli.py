"""CLI entry point for nestscan."""

from __future__ import annotations

import argparse
import json
import signal
import sys
import threading
from typing import Optional

from nestscan import __version__
from nestscan.config import ConfigError, ScanConfig, load_config
from nestscan.export import generate_markdown, result_to_dict
from nestscan.logs import configure_logging
from nestscan.models import Cancelled, ScanResult
from nestscan.scanner import CancellationToken, find_working_copies

EXIT_CANCELLED = 130


def _scan(scan_path: str, config: ScanConfig) -> ScanResult:
    """Run a scan, turning Ctrl-C into a cooperative cancellation."""
    token = CancellationToken()
    previous = None
    in_main = threading.current_thread() is threading.main_thread()
    if in_main:
        previous = signal.signal(signal.SIGINT, lambda signum, frame: token.cancel())

    print(f"  Scanning {scan_path} for working copies...", file=sys.stderr)
    try:
        return find_working_copies(scan_path, config, cancelled=token)
    finally:
        if in_main and previous is not None:
            signal.signal(signal.SIGINT, previous)


def print_summary(result: ScanResult) -> None:
    """Print a one-shot Rich summary to stdout."""
    from rich.console import Console
    from rich.table import Table
    from rich.text import Text

    from nestscan.theme import CYAN, MUTED, RED, SURFACE, YELLOW, render_banner, status_text

    console = Console()
    console.print(render_banner())

    if isinstance(result, Cancelled):
        console.print(f"[{RED}]Scan cancelled.[/{RED}] No results for {result.root}")
        return

    if not result.nodes:
        console.print(f"[{YELLOW}]No working copies found under {result.root}.[/{YELLOW}]")
        return

    table = Table(border_style=SURFACE, show_edge=True, pad_edge=True)
    table.add_column("Directory", style=f"bold {CYAN}")
    table.add_column("URL")
    table.add_column("Repository root", style=MUTED)
    table.add_column("Status", no_wrap=True)

    for node in result.nodes:
        if node.error:
            url = Text(str(node.error), style=RED)
            repo_root = Text("")
        else:
            url, repo_root = Text(node.url), Text(node.repository_root_url)
        table.add_row(Text(node.directory), url, repo_root, status_text(node))

    console.print(table)
    failed = len(result.errors)
    summary = f"  {len(result.nodes)} working copies"
    if failed:
        summary += f", [{RED}]{failed} with errors[/{RED}]"
    console.print(summary)


def print_json(result: ScanResult) -> None:
    """Dump the scan result as JSON to stdout."""
    print(json.dumps(result_to_dict(result), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestscan",
        description="Find nested Subversion working copies under a directory.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-shot summary table (no TUI)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Output a Markdown report",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="NAME",
        default=[],
        help="Skip directories with this name (repeatable)",
    )
    parser.add_argument(
        "--exclude-path",
        action="append",
        metavar="PATH",
        default=[],
        help="Skip this directory and everything under it (repeatable)",
    )
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Descend into every directory, including excluded and foreign-VCS ones",
    )
    parser.add_argument(
        "--svn",
        metavar="PATH",
        help="svn executable to use (default: $NESTSCAN_SVN or 'svn')",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Per-directory svn timeout (default: $NESTSCAN_TIMEOUT or 30)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every visited path",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"nestscan {__version__}",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the nestscan CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(
            svn_binary=args.svn,
            timeout=args.timeout,
            exclude_names=args.exclude,
            exclude_paths=args.exclude_path,
            use_filter=not args.no_filter,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    if not (args.json_output or args.summary or args.markdown):
        from nestscan.tui import run_tui
        run_tui(args.path, config)
        return

    result = _scan(args.path, config)
    if args.json_output:
        print_json(result)
    elif args.markdown:
        print(generate_markdown(result), end="")
    else:
        print_summary(result)

    if isinstance(result, Cancelled):
        print("  Scan cancelled", file=sys.stderr)
        sys.exit(EXIT_CANCELLED)


if __name__ == "__main__":
    main()
