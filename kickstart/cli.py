"""Command-line entry point.

Usage::

    kickstart hello --name Ada
    kickstart init
    kickstart config --output kickstart.json
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError
from rich.markup import escape

from . import __version__
from .config import Config
from .pipeline import RunStatus, ScaffoldPipeline
from .utils import console, print_error, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kickstart",
        description="Kickstart -- scaffold a React + TypeScript + Redux Toolkit app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  kickstart hello --name Ada\n"
            "  kickstart init\n"
            "  kickstart config --output kickstart.json\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    hello = subparsers.add_parser("hello", help="Say hello")
    hello.add_argument("--name", default=None, help="Your name")
    hello.set_defaults(func=cmd_hello)

    init = subparsers.add_parser("init", help="Create React + TS project")
    init.set_defaults(func=cmd_init)

    config = subparsers.add_parser(
        "config", help="Write the effective configuration to a JSON file"
    )
    config.add_argument(
        "--output",
        default="kickstart.json",
        help="Destination file, usable as KICKSTART_CONFIG (default: kickstart.json)",
    )
    config.set_defaults(func=cmd_config)

    return parser


def cmd_hello(args: argparse.Namespace) -> int:
    name = args.name or "World"
    console.print(f"[green]👋 Hello[/green] [cyan]{escape(name)}[/cyan]")
    return 0


def _load_config() -> Config | None:
    try:
        return Config.from_env()
    except (OSError, ValidationError) as exc:
        print_error(f"Invalid configuration: {escape(str(exc))}")
        return None


def cmd_init(args: argparse.Namespace) -> int:
    config = _load_config()
    if config is None:
        return 1
    outcome = asyncio.run(ScaffoldPipeline(config).run())
    if outcome.status is RunStatus.FAILED:
        return 1
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config = _load_config()
    if config is None:
        return 1
    target = config.save(args.output)
    print_success(f"Configuration written to {escape(str(target))}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``kickstart`` and ``python -m kickstart``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        sys.exit(1)

    try:
        code = args.func(args)
    except KeyboardInterrupt:
        console.print("\n[bold red]Interrupted.[/bold red]")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
