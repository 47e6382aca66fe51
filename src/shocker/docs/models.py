"""
Documentation model for Shocker.

Holds the structured representation of a single DocBlock comment:
summary, description, parameters and properties, plus the name of the
declaration that follows it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

RETURN_PROPERTY = "return"
POSITIONAL_SIGIL = "$"
POSITIONAL_TYPE = "any"


class AccumulatorKind(Enum):
    """What the active accumulator of a block points at."""

    PARAMETER = "parameter"
    PROPERTY = "property"


@dataclass
class Parameter:
    """A single @param entry.

    Attributes:
        type: Declared type, "any" for positional references
        name: Parameter name, e.g. "count" or "$1"
        description: Free text, may span several lines
    """

    type: str = ""
    name: str = ""
    description: str = ""

    @property
    def key(self) -> tuple[str, str]:
        """Composite key used to deduplicate parameters."""
        return (self.type, self.name)

    @property
    def label(self) -> str:
        """Table cell text, "<name> (<type>)"."""
        return f"{self.name} ({self.type})"

    @classmethod
    def from_text(cls, text: str) -> Parameter:
        """Build a parameter from the text following "@param".

        Missing tokens become empty strings.

        Args:
            text: Everything after the "@param " prefix

        Returns:
            Parameter instance
        """
        first, _, remainder = text.partition(" ")
        if first.startswith(POSITIONAL_SIGIL):
            return cls(type=POSITIONAL_TYPE, name=first, description=remainder)

        name, _, description = remainder.partition(" ")
        return cls(type=first, name=name, description=description)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
        }


@dataclass(frozen=True)
class Accumulator:
    """Identity of the entry currently receiving continuation text."""

    kind: AccumulatorKind
    key: Any


def _join(existing: str, text: str) -> str:
    if not existing:
        return text
    return f"{existing} {text}"


@dataclass
class DocBlock:
    """One DocBlock comment and the declaration it documents.

    Attributes:
        summary: First plain content line
        description: Remaining plain content lines
        parameters: Parameters keyed by (type, name), first-appearance order
        properties: Other @ properties keyed by name, first-appearance order
        declared_name: Function name found after the block, may be empty
        line_count: Content lines seen inside the block, blanks included
    """

    summary: str = ""
    description: list[str] = field(default_factory=list)
    parameters: dict[tuple[str, str], Parameter] = field(default_factory=dict)
    properties: dict[str, str] = field(default_factory=dict)
    declared_name: str = ""
    line_count: int = 0

    @property
    def description_text(self) -> str:
        """Description lines joined by single spaces."""
        return " ".join(self.description)

    @property
    def return_value(self) -> str:
        """Raw value of the @return property, empty if absent."""
        return self.properties.get(RETURN_PROPERTY, "")

    @property
    def generic_properties(self) -> dict[str, str]:
        """Properties without the reserved return entry."""
        return {
            name: value
            for name, value in self.properties.items()
            if name != RETURN_PROPERTY
        }

    def add_text(self, text: str) -> None:
        """Record a plain content line as summary or description."""
        if not self.summary and not self.description:
            self.summary = text
        else:
            self.description.append(text)

    def add_parameter(self, parameter: Parameter) -> Accumulator:
        """Store a parameter, replacing any entry with the same key."""
        self.parameters[parameter.key] = parameter
        return Accumulator(AccumulatorKind.PARAMETER, parameter.key)

    def set_property(self, name: str, value: str) -> Accumulator:
        """Store a property value, replacing any earlier value."""
        self.properties[name] = value
        return Accumulator(AccumulatorKind.PROPERTY, name)

    def extend(self, accumulator: Accumulator, text: str) -> None:
        """Append continuation text to the entry the accumulator targets."""
        if accumulator.kind is AccumulatorKind.PARAMETER:
            parameter = self.parameters[accumulator.key]
            parameter.description = _join(parameter.description, text)
        else:
            self.properties[accumulator.key] = _join(
                self.properties[accumulator.key], text
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.declared_name,
            "summary": self.summary,
            "description": self.description_text,
            "parameters": [p.to_dict() for p in self.parameters.values()],
            "properties": dict(self.properties),
        }
