"""
Markdown rendering for Shocker.

Turns finished DocBlocks into Markdown sections and renders the
page-level pieces (file heading, footer, table of contents).
"""

from __future__ import annotations

from typing import Iterable

from shocker.docs.models import DocBlock, Parameter
from shocker.docs.normalizer import DEFAULT_DIALECT


class MarkdownRenderer:
    """Render DocBlocks as Markdown lines."""

    def __init__(self, dialect: str = DEFAULT_DIALECT):
        """Initialize renderer with the fence language for code samples."""
        self.dialect = dialect

    def render(self, block: DocBlock) -> list[str]:
        """
        Render one block as a Markdown section.

        Args:
            block: Finished DocBlock with its declared name resolved

        Returns:
            Markdown lines, each group followed by a blank line
        """
        name = block.declared_name
        lines = [
            f"## {name}()",
            "",
            f"```{self.dialect}",
            f"{name}() ",
            "```",
            "",
        ]

        if block.summary:
            lines.append(f"*{block.summary}*")
            lines.append("")

        if block.description:
            lines.append(block.description_text)
            lines.append("")

        if block.parameters:
            lines.extend(self._format_parameters(block.parameters.values()))
            lines.append("")

        if block.return_value:
            lines.append(self._format_return(block.return_value))
            lines.append("")

        properties = block.generic_properties
        if properties:
            pairs = ", ".join(
                f"{key}: {value}" if value else key
                for key, value in properties.items()
            )
            lines.append(f"*{pairs}*")
            lines.append("")

        return lines

    def _format_parameters(self, parameters: Iterable[Parameter]) -> list[str]:
        """Format parameters as a pipe table with aligned columns."""
        rows = [(p.label, p.description) for p in parameters]
        key_width = max(len(key) for key, _ in rows)
        value_width = max(len(value) for _, value in rows)

        return [
            f"| {key.ljust(key_width)} | {value.ljust(value_width)} |"
            for key, value in rows
        ]

    @staticmethod
    def _format_return(value: str) -> str:
        return_type, _, remainder = value.partition(" ")
        if remainder:
            return f"**return ({return_type})** - {remainder}"
        return f"**return ({return_type})**"

    @staticmethod
    def heading(title: str) -> list[str]:
        """File heading with an "=" underline."""
        return [title, "=" * len(title), ""]

    @staticmethod
    def footer(text: str) -> list[str]:
        """Footer text under a "-" rule of the same length."""
        return ["-" * len(text), text, ""]

    @staticmethod
    def table_of_contents(
        heading: str, entries: Iterable[tuple[str, str]]
    ) -> list[str]:
        """
        Render a table of contents page.

        Args:
            heading: Page heading
            entries: (title, link) pairs in display order

        Returns:
            Markdown lines
        """
        lines = MarkdownRenderer.heading(heading)
        for title, link in entries:
            lines.append(f"- [{title}]({link})")
        return lines
