"""
CLI command handlers for Shocker.

Implements each CLI subcommand with error handling and output
formatting.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from shocker.config import ConfigurationError, ShockerConfig, load_config_from_env
from shocker.docs import (
    AssemblyError,
    BlockParser,
    DocumentAssembler,
    LineNormalizer,
)
from shocker.observability import get_logger

logger = get_logger("cli")


def load_config(args: argparse.Namespace) -> ShockerConfig:
    """
    Build the effective configuration for a command.

    Precedence, lowest first: defaults, environment or --config file,
    command line flags.

    Args:
        args: Parsed command line arguments

    Returns:
        ShockerConfig instance
    """
    config_path = getattr(args, "config", None)
    if config_path:
        config = ShockerConfig.from_file(config_path)
    else:
        config = load_config_from_env()

    return config.merge(
        {
            "title": (getattr(args, "title", None) or "").strip(),
            "output": getattr(args, "output", None),
            "force": getattr(args, "force", False),
            "keep_extension": getattr(args, "keep_extension", False),
            "copyright": (getattr(args, "copyright", None) or "").strip(),
            "table_of_contents": getattr(args, "toc", False),
            "capitalize": getattr(args, "capitalize", False),
        }
    )


def _abort(message: str) -> int:
    print(message, file=sys.stderr)
    print("Aborting...", file=sys.stderr)
    return 1


def cmd_generate(args: argparse.Namespace) -> int:
    """
    Generate Markdown documentation for a script or a directory.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 success, 1 error)
    """
    try:
        config = load_config(args)
        result = DocumentAssembler(config).generate(args.path)
    except (AssemblyError, ConfigurationError) as e:
        return _abort(str(e))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Documentation run failed: {e}", path=str(args.path))
        return _abort(str(e))

    if getattr(args, "json", False):
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    if not getattr(args, "quiet", False):
        for path in result.files:
            print(f"{path} ({result.block_counts[path]} blocks)")
        if result.toc_path:
            print(f"{result.toc_path} (table of contents)")

    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """
    Show the DocBlocks found in a script without writing anything.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 success, 1 error)
    """
    try:
        config = load_config(args)
    except (ConfigurationError, OSError) as e:
        return _abort(str(e))

    normalizer = LineNormalizer(
        default_dialect=config.default_dialect,
        allowed_dialects=config.allowed_dialects,
    )
    parser = BlockParser()

    try:
        with open(args.file, "r", encoding="utf-8") as f:
            lines = (line for line in map(normalizer.feed, f) if line is not None)
            blocks = list(parser.parse(lines))
    except (OSError, UnicodeDecodeError) as e:
        return _abort(str(e))

    if getattr(args, "json", False):
        output = {
            "file": str(args.file),
            "dialect": normalizer.dialect,
            "blocks": [block.to_dict() for block in blocks],
        }
        print(json.dumps(output, indent=2))
        return 0

    print(f"{args.file} ({normalizer.dialect}): {len(blocks)} blocks")
    if parser.discarded:
        print(f"{parser.discarded} unterminated block(s) ignored")
    if blocks:
        print()
        rows = [
            {
                "name": block.declared_name or "-",
                "summary": block.summary,
                "params": len(block.parameters),
                "properties": ", ".join(block.properties) or "-",
            }
            for block in blocks
        ]
        print(format_table(rows))

    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """
    Print the effective configuration.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 success, 1 error)
    """
    try:
        config = load_config(args)
    except (ConfigurationError, OSError) as e:
        return _abort(str(e))

    data = config.to_dict()
    if getattr(args, "json", False):
        print(json.dumps(data, indent=2))
        return 0

    width = max(len(key) for key in data)
    for key, value in data.items():
        if isinstance(value, list):
            value = ", ".join(value)
        print(f"{key.ljust(width)}  {value}")
    return 0


def format_table(data: list[dict[str, Any]]) -> str:
    """
    Format data as ASCII table.

    Args:
        data: List of dictionaries

    Returns:
        Formatted table string
    """
    if not data:
        return ""

    headers = list(data[0].keys())

    widths = {h: len(str(h)) for h in headers}
    for row in data:
        for h in headers:
            widths[h] = max(widths[h], len(str(row.get(h, ""))))

    lines = []
    lines.append(" | ".join(str(h).ljust(widths[h]) for h in headers))
    lines.append("-+-".join("-" * widths[h] for h in headers))
    for row in data:
        lines.append(" | ".join(str(row.get(h, "")).ljust(widths[h]) for h in headers))

    return "\n".join(lines)

