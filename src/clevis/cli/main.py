#!/usr/bin/env python3
"""
CLEVIS CLI
----------
Primary interface: loads a link config, runs the requested command and maps
the outcome to a process exit code.

Exit codes:
  0  every checked link matched
  1  values differ (or an unexpected failure)
  2  a file could not be read
  3  a file could not be parsed
  4  a key, span or query was not found
  5  the config is malformed

Author: Clevis Team
"""

import sys
import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from clevis.cli.formatter import LinkFormatter, console
from clevis.config.loader import Config, DEFAULT_CONFIG_PATH
from clevis.core.engine import LinkEngine
from clevis.core.errors import ClevisError

VERSION = "0.1.0"

logger = logging.getLogger("clevis.cli")


def configure_logging(verbose: bool = False):
    """Routes every `clevis.*` logger through a Rich handler on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


class ClevisCLI:
    """
    CLI wrapper that translates user commands into LinkEngine calls.
    Every command returns an exit code instead of exiting, so it can be
    driven from tests.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="clevis",
            description="Clevis - keep values in different files from drifting apart",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = LinkFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures the global flags and subcommands."""
        self.parser.add_argument("--version", action="version", version=f"clevis v{VERSION}")
        self.parser.add_argument("-p", "--path", default=DEFAULT_CONFIG_PATH,
                                 help=f"Path to the configuration file (default: {DEFAULT_CONFIG_PATH})")
        self.parser.add_argument("-v", "--verbose", action="store_true",
                                 help="Show values for matching links and debug logging")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        check_parser = subparsers.add_parser("check", help="Check one link, or all links if none given")
        check_parser.add_argument("link_key", nargs="?", help="Specific link key to check")

        subparsers.add_parser("list", help="List all links in the configuration")

        show_parser = subparsers.add_parser("show", help="Show both values of a link")
        show_parser.add_argument("link_key", help="Link key to show")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]Clevis v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _load_engine(self, config_path: str) -> LinkEngine:
        config = Config.load(config_path)
        logger.debug(f"Loaded config: {config.source}")
        return LinkEngine(config)

    def _check_one(self, engine: LinkEngine, link_key: str, verbose: bool) -> int:
        report = engine.check_link(link_key)
        self.formatter.show_link_result(report, verbose=verbose)
        return report["exit_code"]

    def _check_all(self, engine: LinkEngine, config_path: str, verbose: bool) -> int:
        keys = engine.config.keys()
        if not keys:
            console.print("No links found in config file")
            return 0

        console.print(f"Checking all links in {escape(config_path)}:")
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task("Checking links...", total=len(keys))
            reports = engine.check_all(
                progress_callback=lambda done, total: progress.update(task_id, completed=done)
            )

        if verbose:
            for report in reports:
                self.formatter.show_link_result(report, verbose=True)

        self.formatter.print_final_table(reports, title="Clevis Link Report")
        self.formatter.print_summary(engine.generate_summary(reports))
        return engine.exit_code_for(reports)

    def _list(self, engine: LinkEngine, config_path: str, verbose: bool) -> int:
        console.print(f"Links in {escape(config_path)}:")
        keys = engine.config.keys()
        if not keys:
            console.print("  No links found")
            return 0

        for link_key in keys:
            console.print(f"  {escape(link_key)}", highlight=False)
            if verbose:
                shown = engine.show_link(link_key)
                self.formatter.show_side("A", shown["a"])
                self.formatter.show_side("B", shown["b"])
        return 0

    def _show(self, engine: LinkEngine, link_key: str, verbose: bool) -> int:
        shown = engine.show_link(link_key)
        console.print(f"Values for '{escape(link_key)}':")
        self.formatter.show_side("A", shown["a"])
        self.formatter.show_side("B", shown["b"])

        if verbose:
            console.print(f"  A source: {escape(shown['a']['source'])}", highlight=False)
            console.print(f"  B source: {escape(shown['b']['source'])}", highlight=False)
            if shown["matched"]:
                console.print("  Match status: [green]✓ Values match[/green]")
            else:
                console.print("  Match status: [red]✗ Values do NOT match[/red]")
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        args = self.parser.parse_args(argv)
        configure_logging(args.verbose)

        if not args.command:
            self.print_header("Link Checker")
            self.parser.print_help()
            return 0

        try:
            engine = self._load_engine(args.path)
            if args.command == "check":
                if args.link_key:
                    return self._check_one(engine, args.link_key, args.verbose)
                return self._check_all(engine, args.path, args.verbose)
            if args.command == "list":
                return self._list(engine, args.path, args.verbose)
            if args.command == "show":
                return self._show(engine, args.link_key, args.verbose)
        except ClevisError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
            return e.exit_code

        self.parser.print_help()
        return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(ClevisCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
