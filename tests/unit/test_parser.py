"""
Unit tests for the DocBlock parser state machine.
"""

from __future__ import annotations

import logging

import pytest

from shocker.docs.normalizer import LineNormalizer
from shocker.docs.parser import (
    BlockParser,
    ParserState,
    is_single_line_block,
    parse_declaration,
    strip_comment_prefix,
)


def parse(text: str):
    """Normalize and parse text, returning the parser and its blocks."""
    normalizer = LineNormalizer()
    parser = BlockParser()
    lines = [line for line in map(normalizer.feed, text.splitlines()) if line is not None]
    return parser, list(parser.parse(lines))


class TestHelpers:
    """Tests for module-level helpers."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("#/ Quick helper #/", True),
            ("#/x#/", True),
            ("#/#/", False),
            ("#/", False),
            ("#/ open only", False),
        ],
    )
    def test_is_single_line_block(self, line, expected):
        """Test single-line detection needs both markers and content room."""
        assert is_single_line_block(line) is expected

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("# text", "text"),
            ("#", ""),
            ("#text", "text"),
            ("plain", "plain"),
        ],
    )
    def test_strip_comment_prefix(self, line, expected):
        """Test the "# " prefix is removed."""
        assert strip_comment_prefix(line) == expected

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("function add() {", "add"),
            ("function add {", "add"),
            ("function add(){", "add"),
            ("add() {", ""),
            ("function", ""),
            ("local x=1", ""),
        ],
    )
    def test_parse_declaration(self, line, expected):
        """Test name extraction from declaration lines."""
        assert parse_declaration(line) == expected


class TestBlockParserStates:
    """Tests for state transitions."""

    def test_initial_state(self):
        """Test the parser starts outside any block."""
        parser = BlockParser()
        assert parser.state is ParserState.OUTSIDE
        assert parser.block is None

    def test_multi_line_transitions(self):
        """Test open, close and declaration transitions."""
        parser = BlockParser()

        assert parser.feed("#/") is None
        assert parser.state is ParserState.INSIDE_BLOCK

        assert parser.feed("# Summary") is None
        assert parser.state is ParserState.INSIDE_BLOCK

        assert parser.feed("#/") is None
        assert parser.state is ParserState.AWAIT_DECLARATION

        assert parser.feed("") is None
        assert parser.state is ParserState.AWAIT_DECLARATION

        block = parser.feed("function name() {")
        assert block is not None
        assert block.declared_name == "name"
        assert parser.state is ParserState.OUTSIDE

    def test_single_line_skips_inside_state(self):
        """Test a single-line block goes straight to awaiting a declaration."""
        parser = BlockParser()
        parser.feed("#/ Quick helper #/")

        assert parser.state is ParserState.AWAIT_DECLARATION
        assert parser.block.summary == "Quick helper"

    def test_lines_outside_blocks_are_ignored(self):
        """Test ordinary code produces nothing."""
        _, blocks = parse("echo hello\n# a normal comment\nfunction x() {\n}\n")
        assert blocks == []

    def test_open_marker_text_is_not_content(self):
        """Test text after a multi-line open marker is not consumed."""
        _, blocks = parse("#/ ignored\n# Summary\n#/\nfunction f() {\n")
        assert blocks[0].summary == "Summary"


class TestBlockContent:
    """Tests for content accumulation."""

    def test_full_block(self, add_script):
        """Test the documented add function."""
        _, blocks = parse(add_script)

        assert len(blocks) == 1
        block = blocks[0]
        assert block.declared_name == "add"
        assert block.summary == "Adds two numbers"
        assert block.description == []
        assert [p.to_dict() for p in block.parameters.values()] == [
            {"type": "int", "name": "$1", "description": "First number"},
            {"type": "int", "name": "$2", "description": "Second number"},
        ]
        assert block.properties == {"return": "int Sum of both numbers"}

    def test_description_joined_regardless_of_indentation(self):
        """Test continuation lines join with exactly one space."""
        text = (
            "#/\n"
            "# Summary\n"
            "#\n"
            "#     Indented   first line\n"
            "#\tsecond\tline   \n"
            "#\n"
            "# third line\n"
            "#/\n"
            "function f() {\n"
        )
        _, blocks = parse(text)

        assert blocks[0].description_text == "Indented first line second line third line"

    def test_blank_lines_do_not_make_summary(self):
        """Test a leading blank content line is not counted as first line."""
        _, blocks = parse("#/\n#\n#\n# Real summary\n# More\n#/\nfunction f() {\n")

        assert blocks[0].summary == "Real summary"
        assert blocks[0].description == ["More"]
        assert blocks[0].line_count == 4

    def test_param_continuation(self):
        """Test continuation lines extend the last parameter."""
        text = (
            "#/\n"
            "# @param string $3 The name of the variable to set, we use the variable\n"
            "#                  name of the one we provide for $1.\n"
            "#/\n"
            "function take_if_higher() {\n"
        )
        _, blocks = parse(text)

        param = blocks[0].parameters[("string", "$3")]
        assert param.description == (
            "The name of the variable to set, we use the variable "
            "name of the one we provide for $1."
        )

    def test_property_continuation(self):
        """Test continuation lines extend the last property."""
        text = "#/\n# @note first\n# second\n#/\nfunction f() {\n"
        _, blocks = parse(text)

        assert blocks[0].properties == {"note": "first second"}

    def test_accumulator_captures_plain_text_after_property(self):
        """Test plain lines after a property never become description."""
        text = "#/\n# Summary\n# @author Jane\n#\n# Later text\n#/\nfunction f() {\n"
        _, blocks = parse(text)

        assert blocks[0].description == []
        assert blocks[0].properties["author"] == "Jane Later text"

    def test_positional_param(self):
        """Test the "$n" form has type any."""
        _, blocks = parse("#/\n# @param $1 Input file\n#/\nfunction f() {\n")

        param = list(blocks[0].parameters.values())[0]
        assert (param.type, param.name, param.description) == ("any", "$1", "Input file")

    def test_malformed_param(self):
        """Test "@param" with missing tokens yields empty strings."""
        _, blocks = parse("#/\n# @param\n# @param int\n#/\nfunction f() {\n")

        params = list(blocks[0].parameters.values())
        assert [(p.type, p.name, p.description) for p in params] == [
            ("", "", ""),
            ("int", "", ""),
        ]

    def test_property_without_value(self):
        """Test a bare property records an empty value."""
        _, blocks = parse("#/\n# @deprecated\n#/\nfunction f() {\n")
        assert blocks[0].properties == {"deprecated": ""}

    def test_duplicate_property_replaces(self):
        """Test a repeated property line replaces the earlier value."""
        _, blocks = parse("#/\n# @since 1.0\n# @author A\n# @since 2.0\n#/\nfunction f() {\n")
        assert list(blocks[0].properties.items()) == [("since", "2.0"), ("author", "A")]

    def test_parameters_keep_first_appearance_order(self):
        """Test three or more parameters keep source order."""
        text = (
            "#/\n"
            "# @param int $1 one\n"
            "# @param int $2 two\n"
            "# @param int $3 three\n"
            "# @param int $4 four\n"
            "#/\n"
            "function f() {\n"
        )
        _, blocks = parse(text)

        assert [p.name for p in blocks[0].parameters.values()] == ["$1", "$2", "$3", "$4"]


class TestBlockLifecycle:
    """Tests for block boundaries and discarding."""

    def test_new_block_resets_state(self):
        """Test every block starts with empty accumulators."""
        text = (
            "#/\n# First\n# @param int $1 x\n#/\nfunction one() {\n}\n"
            "#/\n# Second\n#/\nfunction two() {\n}\n"
        )
        _, blocks = parse(text)

        assert [b.declared_name for b in blocks] == ["one", "two"]
        assert blocks[1].summary == "Second"
        assert blocks[1].parameters == {}

    def test_unknown_declaration_keyword(self):
        """Test a block followed by a non-function line has an empty name."""
        _, blocks = parse("#/ Variable doc #/\nreadonly LIMIT=10\n")

        assert len(blocks) == 1
        assert blocks[0].declared_name == ""
        assert blocks[0].summary == "Variable doc"

    def test_unterminated_block_is_discarded(self, caplog):
        """Test a block still open at end of input is dropped."""
        caplog.set_level(logging.DEBUG, logger="shocker")
        parser, blocks = parse("#/\n# Never closed\n# @param int $1 x\n")

        assert blocks == []
        assert parser.discarded == 1
        assert parser.state is ParserState.OUTSIDE
        assert "Discarding unterminated block" in caplog.text

    def test_block_without_declaration_is_discarded(self):
        """Test a closed block at end of input is dropped."""
        parser, blocks = parse("#/ Trailing #/\n\n\n")

        assert blocks == []
        assert parser.discarded == 1

    def test_declaration_is_first_non_blank_line(self):
        """Test any non-blank line finishes the block, even another marker."""
        _, blocks = parse("#/ First #/\n#/ Second #/\nfunction f() {\n")

        assert len(blocks) == 1
        assert blocks[0].summary == "First"
        assert blocks[0].declared_name == ""

    def test_blocks_in_source_order(self):
        """Test blocks are yielded in the order of their declarations."""
        text = "".join(
            f"#/ Doc {name} #/\nfunction {name}() {{\n}}\n" for name in ["c", "a", "b"]
        )
        _, blocks = parse(text)

        assert [b.declared_name for b in blocks] == ["c", "a", "b"]
