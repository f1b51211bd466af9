"""Command-line interface for workfs.

Runs single file operations through the file facade.
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workfs.core.config.loader import load_app_config
from workfs.core.fs import FileSystemFacade, create_default_facade
from workfs.core.io import FileSystemError, FileType
from workfs.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def _format_type(kind: FileType) -> str:
    names = [
        member.name.lower()
        for member in (FileType.FILE, FileType.DIRECTORY, FileType.SYMBOLIC_LINK)
        if member.name and kind & member
    ]
    return "+".join(names) or "unknown"


def _format_ms(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).isoformat(sep=" ", timespec="seconds")


def _read_content(args: argparse.Namespace) -> str:
    """Content from the positional argument, or stdin when omitted."""
    if args.content is not None:
        return str(args.content)
    return sys.stdin.read()


async def run_command(args: argparse.Namespace, fs: FileSystemFacade) -> int:
    """Execute one parsed command.

    Args:
        args: Parsed CLI arguments
        fs: Facade to run the command against

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        if args.cmd == "stat":
            st = await fs.stat(args.path)
            table = Table(show_header=False)
            table.add_row("locator", str(fs.locator(args.path)))
            table.add_row("type", _format_type(st.type))
            table.add_row("size", str(st.size))
            table.add_row("created", _format_ms(st.ctime))
            table.add_row("modified", _format_ms(st.mtime))
            console.print(table)
        elif args.cmd == "ls":
            table = Table("name", "type")
            for name, kind in await fs.read_directory(args.path):
                table.add_row(name, _format_type(kind))
            console.print(table)
        elif args.cmd == "mkdir":
            await fs.create_directory(args.path)
        elif args.cmd == "cat":
            sys.stdout.write(
                await fs.read_file(args.path, encoding=args.encoding, strict=args.strict)
            )
        elif args.cmd == "write":
            await fs.write_file(args.path, _read_content(args))
        elif args.cmd == "append":
            await fs.append_file(args.path, _read_content(args))
        elif args.cmd == "rm":
            await fs.delete(args.path, recursive=args.recursive, use_trash=not args.no_trash)
        elif args.cmd == "mv":
            await fs.rename(args.source, args.target, overwrite=args.overwrite)
        elif args.cmd == "cp":
            await fs.copy(args.source, args.target, overwrite=args.overwrite)
        elif args.cmd == "exists":
            found = await fs.exists(args.path)
            console.print("true" if found else "false")
            return 0 if found else 1
        elif args.cmd == "truncate":
            await fs.truncate(args.path, args.length, encoding=args.encoding)
        elif args.cmd == "access":
            console.print(fs.access(args.path).name.lower())
        else:
            raise ValueError(f"Unknown command: {args.cmd}")
    except (FileSystemError, LookupError, ValueError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]", highlight=False)
        return 1
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="workfs",
        description="workfs - file operations across local and virtual schemes",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to app config JSON/YAML (default: workfs.yaml if present)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    for name, help_text in (
        ("stat", "Show entry metadata"),
        ("ls", "List directory entries"),
        ("mkdir", "Create a directory and its parents"),
        ("exists", "Exit 0 if the entry exists, 1 otherwise"),
        ("access", "Show the access the scheme allows (none/read/write)"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("path", help="Path or URI")

    cat = sub.add_parser("cat", help="Print a file")
    cat.add_argument("path", help="Path or URI")
    cat.add_argument("--encoding", default="utf-8", help="Text encoding (default: utf-8)")
    cat.add_argument("--strict", action="store_true", help="Fail on invalid byte sequences")

    for name, help_text in (
        ("write", "Replace file content"),
        ("append", "Append to a file, creating it when missing"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("path", help="Path or URI")
        cmd.add_argument("content", nargs="?", default=None, help="Text (default: read stdin)")

    rm = sub.add_parser("rm", help="Delete a file or directory")
    rm.add_argument("path", help="Path or URI")
    rm.add_argument("-r", "--recursive", action="store_true", help="Delete non-empty directories")
    rm.add_argument("--no-trash", action="store_true", help="Delete permanently")

    for name, help_text in (("mv", "Move an entry"), ("cp", "Copy an entry")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("source", help="Source path or URI")
        cmd.add_argument("target", help="Target path or URI")
        cmd.add_argument("--overwrite", action="store_true", help="Replace an existing target")

    truncate = sub.add_parser("truncate", help="Keep the first N characters of a file")
    truncate.add_argument("path", help="Path or URI")
    truncate.add_argument("--length", type=int, default=0, help="Characters to keep (default: 0)")
    truncate.add_argument("--encoding", default="utf-8", help="Text encoding (default: utf-8)")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        app_config = load_app_config(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(
            f"[red]ERROR: Invalid configuration: {escape(str(e))}[/red]", highlight=False
        )
        sys.exit(1)

    configure_logging(
        level=args.log_level or app_config.logging.level,
        format_string=app_config.logging.format,
        filename=app_config.logging.filename,
        structured=app_config.logging.structured,
    )

    fs = create_default_facade(app_config)
    sys.exit(asyncio.run(run_command(args, fs)))


if __name__ == "__main__":
    main()
