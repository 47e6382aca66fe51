"""
Unit tests for the DocBlock documentation model.
"""

from __future__ import annotations

from shocker.docs.models import (
    AccumulatorKind,
    DocBlock,
    Parameter,
)


class TestParameter:
    """Tests for Parameter."""

    def test_typed_form(self):
        """Test "<type> <name> <description>" splits into three parts."""
        param = Parameter.from_text("string path Where to write the file")

        assert param.type == "string"
        assert param.name == "path"
        assert param.description == "Where to write the file"

    def test_positional_form(self):
        """Test a leading "$" token is a positional reference of type any."""
        param = Parameter.from_text("$1 The first argument")

        assert param.type == "any"
        assert param.name == "$1"
        assert param.description == "The first argument"

    def test_typed_positional_form(self):
        """Test a typed positional parameter keeps its type."""
        param = Parameter.from_text("int $2 Second number")

        assert param.key == ("int", "$2")
        assert param.label == "$2 (int)"

    def test_missing_tokens_become_empty(self):
        """Test malformed input substitutes empty strings."""
        assert Parameter.from_text("int").to_dict() == {
            "type": "int",
            "name": "",
            "description": "",
        }
        assert Parameter.from_text("") == Parameter()


class TestDocBlock:
    """Tests for DocBlock."""

    def test_create_empty(self):
        """Test a new block has no content."""
        block = DocBlock()

        assert block.summary == ""
        assert block.description == []
        assert block.parameters == {}
        assert block.properties == {}
        assert block.declared_name == ""

    def test_add_text_summary_then_description(self):
        """Test the first text line is the summary, the rest description."""
        block = DocBlock()
        block.add_text("Summary")
        block.add_text("First part")
        block.add_text("second part")

        assert block.summary == "Summary"
        assert block.description_text == "First part second part"

    def test_duplicate_parameter_replaces_in_place(self):
        """Test a repeated key overwrites but keeps first-appearance order."""
        block = DocBlock()
        block.add_parameter(Parameter("int", "$1", "old"))
        block.add_parameter(Parameter("int", "$2", "second"))
        block.add_parameter(Parameter("int", "$1", "new"))

        assert [p.name for p in block.parameters.values()] == ["$1", "$2"]
        assert block.parameters[("int", "$1")].description == "new"

    def test_same_name_different_type_is_distinct(self):
        """Test parameters are keyed by type and name together."""
        block = DocBlock()
        block.add_parameter(Parameter("int", "$1", "a"))
        block.add_parameter(Parameter("string", "$1", "b"))

        assert len(block.parameters) == 2

    def test_extend_parameter(self):
        """Test continuation text is appended with a single space."""
        block = DocBlock()
        accumulator = block.add_parameter(Parameter("string", "$3", "The name"))
        block.extend(accumulator, "of the variable")

        assert accumulator.kind is AccumulatorKind.PARAMETER
        assert block.parameters[("string", "$3")].description == (
            "The name of the variable"
        )

    def test_extend_empty_property(self):
        """Test continuing an empty value adds no leading space."""
        block = DocBlock()
        accumulator = block.set_property("example", "")
        block.extend(accumulator, "add 1 2")

        assert block.properties["example"] == "add 1 2"

    def test_return_is_not_generic(self):
        """Test return is excluded from the generic properties."""
        block = DocBlock()
        block.set_property("author", "Jane Doe")
        block.set_property("return", "int Status")
        block.set_property("since", "1.0")

        assert block.return_value == "int Status"
        assert block.generic_properties == {"author": "Jane Doe", "since": "1.0"}

    def test_to_dict(self):
        """Test dictionary form."""
        block = DocBlock(summary="Helper", declared_name="helper")
        block.add_parameter(Parameter("any", "$1", "Input"))
        block.set_property("author", "Jane")

        data = block.to_dict()

        assert data["name"] == "helper"
        assert data["summary"] == "Helper"
        assert data["description"] == ""
        assert data["parameters"] == [
            {"type": "any", "name": "$1", "description": "Input"}
        ]
        assert data["properties"] == {"author": "Jane"}
