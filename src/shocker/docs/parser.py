"""
DocBlock parser for Shocker.

A line-driven state machine that recognizes DocBlock comments in
normalized shell script lines and builds one DocBlock per comment.

A DocBlock looks like this:

    #/
    # Summary line
    #
    # Longer description, may span
    # several lines.
    #
    # @param string $1 What the first argument is
    # @return int Exit status
    #/
    function name() {

Single-line blocks are written as "#/ Summary #/".
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Iterator

from shocker.docs.models import Accumulator, DocBlock, Parameter

logger = logging.getLogger(__name__)

BLOCK_MARKER = "#/"
COMMENT_PREFIX = "#"
PROPERTY_SIGIL = "@"
PARAM_PROPERTY = "param"
DECLARATION_KEYWORD = "function"


class ParserState(Enum):
    """States of the block parser."""

    OUTSIDE = "outside"
    INSIDE_BLOCK = "inside_block"
    AWAIT_DECLARATION = "await_declaration"


def is_single_line_block(line: str) -> bool:
    """Check whether a line opens and closes a block by itself."""
    return (
        line.startswith(BLOCK_MARKER)
        and line.endswith(BLOCK_MARKER)
        and len(line) > len(BLOCK_MARKER) * 2
    )


def strip_comment_prefix(line: str) -> str:
    """Remove the leading "# " of a line inside a block."""
    if line.startswith(COMMENT_PREFIX):
        line = line[len(COMMENT_PREFIX):]
        if line.startswith(" "):
            line = line[1:]
    return line.strip()


def parse_declaration(line: str, keyword: str = DECLARATION_KEYWORD) -> str:
    """
    Extract the declared name from the line following a block.

    Args:
        line: Normalized, non-blank declaration line
        keyword: Keyword that must start the declaration

    Returns:
        The name before "(", or an empty string when the line does not
        start with the keyword
    """
    tokens = line.split()
    if len(tokens) < 2 or tokens[0] != keyword:
        return ""
    return tokens[1].partition("(")[0]


class BlockParser:
    """
    Parse DocBlocks out of a stream of normalized lines.

    Only one block is accumulated at a time. A block is returned from
    feed() once the declaration line after it has been seen; a block
    still pending when the input ends is dropped.
    """

    def __init__(self, declaration_keyword: str = DECLARATION_KEYWORD):
        """
        Initialize parser.

        Args:
            declaration_keyword: Keyword that introduces a documented function
        """
        self.declaration_keyword = declaration_keyword
        self.state = ParserState.OUTSIDE
        self.block: DocBlock | None = None
        self.active: Accumulator | None = None
        self.discarded = 0

    def feed(self, line: str) -> DocBlock | None:
        """
        Process one normalized line.

        Args:
            line: Line as returned by LineNormalizer

        Returns:
            The finished DocBlock if this line was its declaration, else None
        """
        if self.state is ParserState.AWAIT_DECLARATION:
            if not line:
                return None
            return self._finalize(line)

        if self.state is ParserState.INSIDE_BLOCK:
            if line == BLOCK_MARKER:
                self.state = ParserState.AWAIT_DECLARATION
            else:
                self._consume(strip_comment_prefix(line))
            return None

        if line.startswith(BLOCK_MARKER):
            self._open()
            if is_single_line_block(line):
                marker = len(BLOCK_MARKER)
                self._consume(line[marker:-marker].strip())
                self.state = ParserState.AWAIT_DECLARATION
            else:
                self.state = ParserState.INSIDE_BLOCK

        return None

    def finish(self) -> None:
        """Signal end of input, dropping any unfinished block."""
        if self.block is not None:
            self.discarded += 1
            logger.debug(
                "Discarding unterminated block (state=%s, summary=%r)",
                self.state.value,
                self.block.summary,
            )
        self._reset()

    def parse(self, lines: Iterable[str]) -> Iterator[DocBlock]:
        """Yield finished blocks from normalized lines, in source order."""
        for line in lines:
            block = self.feed(line)
            if block is not None:
                yield block
        self.finish()

    def _open(self) -> None:
        self.block = DocBlock()
        self.active = None

    def _reset(self) -> None:
        self.state = ParserState.OUTSIDE
        self.block = None
        self.active = None

    def _consume(self, content: str) -> None:
        """Apply one content line to the current block."""
        block = self.block
        block.line_count += 1
        if not content:
            return

        if content.startswith(PROPERTY_SIGIL):
            name, _, value = content[len(PROPERTY_SIGIL):].partition(" ")
            if name == PARAM_PROPERTY:
                self.active = block.add_parameter(Parameter.from_text(value))
            else:
                self.active = block.set_property(name, value)
        elif self.active is not None:
            block.extend(self.active, content)
        else:
            block.add_text(content)

    def _finalize(self, line: str) -> DocBlock:
        block = self.block
        block.declared_name = parse_declaration(line, self.declaration_keyword)
        if not block.declared_name:
            logger.debug("No declaration found after block: %r", line)
        self._reset()
        return block
