# src/clevis/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


class LinkFormatter:
    """
    LinkFormatter: renders link reports, values and summaries.
    Knows nothing about readers; it only reads the engine's report dicts.
    """

    def __init__(self, output: Console = console):
        self.console = output

    def show_values(self, value_a: Any, value_b: Any, indent: int = 2):
        pad = " " * indent
        self.console.print(f"{pad}Value A: [white]'{escape(str(value_a))}'[/white]", highlight=False)
        self.console.print(f"{pad}Value B: [white]'{escape(str(value_b))}'[/white]", highlight=False)

    def show_link_result(self, report: Dict[str, Any], verbose: bool = False):
        """
        One line per link. Mismatches always show both values; matches only
        when verbose.
        """
        link = report["link"]
        status = report["status"]

        if status == "MATCH":
            self.console.print(f"[green]✓[/green] Values match for '{escape(link)}'")
            if verbose:
                self.show_values(report.get("value_a"), report.get("value_b"))
        elif status == "MISMATCH":
            self.console.print(f"[bold red]✗[/bold red] Values do NOT match for '{escape(link)}'")
            self.show_values(report.get("value_a"), report.get("value_b"))
        else:
            self.console.print(f"[bold red]✗[/bold red] '{escape(link)}': Error: {escape(str(report.get('error')))}",
                               highlight=False)

    def show_side(self, label: str, side: Dict[str, Any]):
        if side.get("error"):
            self.console.print(f"  Error reading {label}: [red]{escape(side['error'])}[/red]", highlight=False)
        else:
            self.console.print(f"  Value {label}: [white]'{escape(side['value'])}'[/white]", highlight=False)

    def print_final_table(self, reports: List[Dict[str, Any]], title: str):
        table = Table(title=title, show_lines=True, header_style="bold magenta")
        table.add_column("Link", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Detail")
        table.add_column("Result", justify="center")

        for r in reports:
            status = r.get("status", "ERROR")
            status_color = "green" if status == "MATCH" else "yellow" if status == "MISMATCH" else "red"
            result_icon = "✅" if r.get("success") else "❌"

            if status == "MISMATCH":
                detail = f"A: '{escape(str(r.get('value_a')))}'\nB: '{escape(str(r.get('value_b')))}'"
            elif status == "ERROR":
                detail = escape(f"[{r.get('error_kind')}] {r.get('error')}")
            else:
                detail = ""

            table.add_row(
                escape(str(r.get("link"))),
                f"[{status_color}]{status}[/{status_color}]",
                detail,
                result_icon,
            )

        self.console.print(table)

    def print_summary(self, summary: Dict[str, Any]):
        failed = summary.get("failed_links") or []
        body = (
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Links:    {summary['total_links']}\n"
            f"Matched:        [green]{summary['matched']}[/green]\n"
            f"Mismatched:     [yellow]{summary['mismatched']}[/yellow]\n"
            f"Errors:         [red]{summary['errors']}[/red]"
        )
        if failed:
            body += f"\nFailed links:   {', '.join(escape(str(k)) for k in failed)}"
        self.console.print(Panel(body, border_style="dim"))
