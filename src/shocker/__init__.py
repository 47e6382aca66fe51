"""
Shocker - DocBlock documentation for shell scripts

Parses "#/" DocBlock comments in bash, sh and zsh scripts and writes
Markdown reference pages, one page per script.

Quick Start:
    >>> from shocker import DocumentAssembler, ShockerConfig
    >>>
    >>> config = ShockerConfig(output="docs", table_of_contents=True)
    >>> result = DocumentAssembler(config).generate("scripts/")
    >>> print(f"Wrote {len(result.files)} pages")
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "Niklas Rosenqvist"

from shocker.config import ShockerConfig, load_config_from_env
from shocker.docs import (
    BlockParser,
    DocBlock,
    DocumentAssembler,
    LineNormalizer,
    MarkdownRenderer,
    Parameter,
)

__all__ = [
    "__version__",
    "BlockParser",
    "DocBlock",
    "DocumentAssembler",
    "LineNormalizer",
    "MarkdownRenderer",
    "Parameter",
    "ShockerConfig",
    "load_config_from_env",
]
