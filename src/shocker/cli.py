"""
Shocker CLI entry point.

This module provides the command-line interface for Shocker.
"""

from __future__ import annotations

import argparse
import os
import sys

from shocker import __version__
from shocker.cli_commands import cmd_config, cmd_generate, cmd_inspect
from shocker.observability import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="shocker",
        description="Shocker - Markdown documentation from shell script DocBlocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"shocker {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    parser.add_argument(
        "--log-format",
        choices=["human", "json"],
        default=os.getenv("SHOCKER_LOG_FORMAT", "human"),
        help="Log output format (default: human)",
    )

    parser.add_argument(
        "--config",
        help="Configuration file (.json, .yaml or .yml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Markdown documentation",
        description=(
            "Generate Markdown from the DocBlocks of a script, or of every "
            "script in a directory."
        ),
    )
    generate_parser.add_argument(
        "path",
        help="Script file or directory of scripts",
    )
    generate_parser.add_argument(
        "-t",
        "--title",
        help="File heading, or table of contents heading for directories",
    )
    generate_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing output files",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output file, or output directory",
    )
    generate_parser.add_argument(
        "-x",
        "--keep-extension",
        action="store_true",
        help="Keep file extensions in headings",
    )
    generate_parser.add_argument(
        "-c",
        "--copyright",
        help="Copyright statement appended to every page",
    )
    generate_parser.add_argument(
        "-C",
        "--capitalize",
        action="store_true",
        help="Capitalize file names and headings",
    )
    generate_parser.add_argument(
        "-T",
        "--toc",
        action="store_true",
        help="Write a table of contents for directory runs",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the DocBlocks of a script",
        description="Parse a script and list its DocBlocks without writing files.",
    )
    inspect_parser.add_argument(
        "file",
        help="Script file to inspect",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
        description="Show configuration after applying files and environment.",
    )
    config_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    elif args.quiet:
        level = "ERROR"
    else:
        level = os.getenv("SHOCKER_LOG_LEVEL", "WARNING")
    configure_logging(level=level, format=args.log_format)

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "generate": cmd_generate,
        "inspect": cmd_inspect,
        "config": cmd_config,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
