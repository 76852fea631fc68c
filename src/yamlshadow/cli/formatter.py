# src/yamlshadow/cli/formatter.py
import difflib
from typing import Iterable, List, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from yamlshadow.core.models import CommentType

# Initialize the Rich console for high-quality terminal output
console = Console()


class ShadowFormatter:
    """
    The visual side of the CLI: diffs, comment listings and check reports.
    """

    def display_diff(self, original_text: str, merged_text: str, file_name: str) -> bool:
        """
        Renders a colorized unified diff. Returns True when the texts differ.
        """
        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            merged_text.splitlines(),
            fromfile=f"Original: {file_name}",
            tofile="Re-saved",
            lineterm=""
        ))

        if not diff_list:
            console.print(f"[dim]ℹ No changes for {file_name}.[/dim]")
            return False

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=f"Changes: {file_name}", border_style="yellow"))
        return True

    def print_comments(self, file_name: str, comments: Iterable[Tuple[str, CommentType, str]],
                       header: str = None, footer: str = None):
        """Lists every comment of a document with the path it is anchored to."""
        table = Table(title=f"Comments in {file_name}", show_header=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Type")
        table.add_column("Comment")

        if header is not None:
            table.add_row("(header)", "block", header)
        for path, comment_type, text in comments:
            table.add_row(path, comment_type.value, text)
        if footer is not None:
            table.add_row("(footer)", "block", footer)

        console.print(table)

    def print_check_table(self, reports: List[dict]):
        """
        Builds the summary table shown at the end of a round-trip check.
        """
        table = Table(title="Round-Trip Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="dim")
        table.add_column("Comments", justify="right")
        table.add_column("Status")
        table.add_column("Result", justify="center")

        for r in reports:
            result_icon = "✅" if r.get("success") else "❌"
            table.add_row(
                r.get("file_path"),
                str(r.get("comments", 0)),
                r.get("status"),
                result_icon
            )

        console.print(table)
