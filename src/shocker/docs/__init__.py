"""
DocBlock documentation generation for Shocker.

This package parses DocBlock comments in shell scripts and renders them
as Markdown.

Key Components:
- LineNormalizer: Canonicalizes raw lines and detects the shell dialect
- BlockParser: State machine that builds DocBlocks from lines
- MarkdownRenderer: Renders DocBlocks as Markdown sections
- DocumentAssembler: Runs the pipeline over files and directories

Example:
    from shocker.docs import DocumentAssembler

    assembler = DocumentAssembler()
    assembler.generate("scripts/deploy.sh")
"""

from shocker.docs.assembler import (
    AssemblyError,
    DocumentAssembler,
    GenerationResult,
    OutputExistsError,
    SourceNotFoundError,
)
from shocker.docs.models import DocBlock, Parameter
from shocker.docs.normalizer import LineNormalizer
from shocker.docs.parser import BlockParser, ParserState
from shocker.docs.renderer import MarkdownRenderer

__all__ = [
    "AssemblyError",
    "BlockParser",
    "DocBlock",
    "DocumentAssembler",
    "GenerationResult",
    "LineNormalizer",
    "MarkdownRenderer",
    "OutputExistsError",
    "Parameter",
    "ParserState",
    "SourceNotFoundError",
]
