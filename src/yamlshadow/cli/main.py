#!/usr/bin/env python3
"""
YAMLSHADOW CLI
--------------
Inspect and edit comments of YAML files from the terminal, and check
that files survive a load/save cycle with their comments intact.

Author: YamlShadow Team
Date: 2026-01-16
"""

import sys
import logging
import argparse
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from yamlshadow.cli.formatter import ShadowFormatter
from yamlshadow.core.exceptions import InvalidConfigurationError, PathNotFoundError
from yamlshadow.core.models import CommentType
from yamlshadow.core.options import YamlOptions
from yamlshadow.core.yamlfile import YamlFile
from yamlshadow.comments.formatter import CommentFormat

__version__ = "1.0.0"

# Global console for consistent styling across the application
console = Console()
logger = logging.getLogger("yamlshadow.cli")


class YamlShadowCLI:
    """
    CLI wrapper that translates user commands into YamlFile actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="yamlshadow",
            description="YamlShadow - comment-preserving YAML configuration editor",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ShadowFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"yamlshadow v{__version__}")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="List the comments of a file")
        show_parser.add_argument("file", help="Path to a YAML file")

        get_parser = subparsers.add_parser("get", help="Print the comment at a path")
        get_parser.add_argument("file", help="Path to a YAML file")
        get_parser.add_argument("path", help="Dotted path, e.g. servers[0].host")
        get_parser.add_argument("--side", action="store_true", help="Read the side comment")

        set_parser = subparsers.add_parser("set", help="Set (or remove) the comment at a path")
        set_parser.add_argument("file", help="Path to a YAML file")
        set_parser.add_argument("path", help="Dotted path, e.g. servers[0].host")
        set_parser.add_argument("text", nargs="?", help="Comment text; omit to remove")
        set_parser.add_argument("--side", action="store_true", help="Write a side comment")
        set_parser.add_argument("--format", default="default",
                                choices=[f.value for f in CommentFormat], help="Comment format")
        set_parser.add_argument("--strict", action="store_true", help="Fail if the path holds no value")
        set_parser.add_argument("--dry-run", action="store_true", help="Preview results without writing")
        set_parser.add_argument("--diff", action="store_true", help="Show the resulting changes")

        header_parser = subparsers.add_parser("header", help="Print or replace the file header")
        header_parser.add_argument("file", help="Path to a YAML file")
        header_parser.add_argument("text", nargs="?", help="New header text")
        header_parser.add_argument("--dry-run", action="store_true", help="Preview results without writing")
        header_parser.add_argument("--diff", action="store_true", help="Show the resulting changes")

        check_parser = subparsers.add_parser("check", help="Verify files re-save byte for byte")
        check_parser.add_argument("files", nargs="+", help="YAML files to check")
        check_parser.add_argument("--diff", action="store_true", help="Show differences on mismatch")

    def _open(self, path: str, options: Optional[YamlOptions] = None) -> YamlFile:
        config = YamlFile(path, options)
        config.load_with_comments()
        return config

    def _show(self, args: argparse.Namespace) -> int:
        config = self._open(args.file)
        self.formatter.print_comments(
            args.file, config.comment_mapper.comments(),
            header=config.get_header(), footer=config.get_footer()
        )
        return 0

    def _get(self, args: argparse.Namespace) -> int:
        config = self._open(args.file)
        comment_type = CommentType.SIDE if args.side else CommentType.BLOCK
        comment = config.get_comment(args.path, comment_type)
        if comment is None:
            console.print(f"[dim]No {comment_type.value} comment at '{args.path}'.[/dim]")
            return 1
        console.print(comment, markup=False, highlight=False)
        return 0

    def _set(self, args: argparse.Namespace) -> int:
        options = YamlOptions(strict=args.strict, comment_format=CommentFormat(args.format))
        config = self._open(args.file, options)
        original = config.engine.read(config.path)
        comment_type = CommentType.SIDE if args.side else CommentType.BLOCK
        config.set_comment(args.path, args.text, comment_type)
        return self._write(config, original, args.dry_run, args.diff)

    def _header(self, args: argparse.Namespace) -> int:
        config = self._open(args.file)
        if args.text is None:
            header = config.get_header()
            if header is None:
                console.print("[dim]No header.[/dim]")
            else:
                console.print(header, markup=False, highlight=False)
            return 0
        original = config.engine.read(config.path)
        config.set_header(args.text)
        return self._write(config, original, args.dry_run, args.diff)

    def _write(self, config: YamlFile, original: str, dry_run: bool, diff: bool) -> int:
        merged = config.save_to_string()
        if diff or dry_run:
            self.formatter.display_diff(original, merged, str(config.path))
        if dry_run:
            console.print("[yellow]Dry run: nothing written.[/yellow]")
            return 0
        config.engine.atomic_write(config.path, merged)
        console.print(f"[green]✔ Saved {config.path}[/green]")
        return 0

    def _check(self, args: argparse.Namespace) -> int:
        reports = []
        for file_path in args.files:
            report = {"file_path": file_path, "success": False, "status": "", "comments": 0}
            try:
                config = self._open(file_path)
                original = config.engine.read(config.path)
                merged = config.save_to_string()
                report["comments"] = sum(1 for _ in config.comment_mapper.comments())
                report["success"] = merged == original
                report["status"] = "IDENTICAL" if report["success"] else "CHANGED"
                if not report["success"] and args.diff:
                    self.formatter.display_diff(original, merged, file_path)
            except (OSError, UnicodeDecodeError, InvalidConfigurationError) as e:
                logger.debug("Check of %s failed", file_path, exc_info=True)
                report["status"] = f"ERROR: {e}"
            reports.append(report)
        self.formatter.print_check_table(reports)
        return 0 if all(r["success"] for r in reports) else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        handlers = {
            "show": self._show,
            "get": self._get,
            "set": self._set,
            "header": self._header,
            "check": self._check,
        }
        handler = handlers.get(args.command)
        if handler is None:
            self.parser.print_help()
            return 0
        try:
            return handler(args)
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[bold red]✘ Cannot read {getattr(args, 'file', '')}:[/bold red] {e}")
        except InvalidConfigurationError as e:
            console.print(Panel(str(e), title="[bold red]Invalid YAML[/bold red]", border_style="red"))
        except (PathNotFoundError, ValueError) as e:
            console.print(f"[bold red]✘[/bold red] {e}")
        return 2


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(YamlShadowCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
