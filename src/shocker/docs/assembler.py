"""
Document assembly for Shocker.

Drives normalization, parsing and rendering over whole files, decides
where the Markdown goes, and builds the table of contents page for
directory runs.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, TextIO

from shocker.config import ShockerConfig
from shocker.docs.normalizer import LineNormalizer
from shocker.docs.parser import BlockParser
from shocker.docs.renderer import MarkdownRenderer
from shocker.observability import get_logger


class AssemblyError(Exception):
    """Base exception for documentation runs that cannot proceed."""

    pass


class SourceNotFoundError(AssemblyError):
    """Raised when the input path does not exist."""

    pass


class OutputExistsError(AssemblyError):
    """Raised when an output file exists and overwriting is not allowed."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f'The file "{path}" already exists. If you want to continue anyway '
            "and overwrite, specify the flag -f (force)."
        )


@dataclass
class GenerationResult:
    """Outcome of a generate() call."""

    files: list[str] = field(default_factory=list)
    toc_path: str | None = None
    block_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total_blocks(self) -> int:
        """Number of rendered blocks across all files."""
        return sum(self.block_counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "files": self.files,
            "toc": self.toc_path,
            "block_counts": self.block_counts,
            "total_blocks": self.total_blocks,
        }


def natural_sort_key(path: Path) -> list[Any]:
    """Sort key that orders "file2" before "file10"."""
    return [
        int(part) if part.isdigit() else part.lower()
        for part in re.split(r"(\d+)", path.name)
    ]


def capitalize_first(text: str) -> str:
    """Upper-case only the first character."""
    return text[:1].upper() + text[1:]


class DocumentAssembler:
    """Generate Markdown pages from shell scripts."""

    def __init__(self, config: ShockerConfig | None = None):
        """
        Initialize assembler.

        Args:
            config: Run settings, defaults if None
        """
        self.config = config or ShockerConfig()
        self.logger = get_logger("docs.assembler")

    def file_title(self, source: Path) -> str:
        """Heading for a page generated from source."""
        title = source.name
        if not self.config.keep_extension:
            title = os.path.splitext(title)[0]
        if self.config.capitalize:
            title = capitalize_first(title)
        return title

    def output_name(self, source: Path) -> str:
        """Markdown file name for source."""
        name = f"{source.stem}.md"
        if self.config.capitalize:
            name = capitalize_first(name)
        return name

    def resolve_output(self, source: Path) -> Path:
        """
        Output path for a single-file run.

        Args:
            source: Script being documented

        Returns:
            The configured output file, or a file named after the source
            inside the configured directory or the working directory
        """
        if not self.config.output:
            return Path(self.output_name(source))

        output = Path(self.config.output)
        if output.is_dir():
            return output / self.output_name(source)
        return output

    def check_overwrite(self, path: Path) -> None:
        """Raise OutputExistsError if path exists and force is off."""
        if path.exists() and not self.config.force:
            raise OutputExistsError(path)

    def discover_sources(self, directory: Path) -> list[Path]:
        """Scripts directly inside directory, in natural sort order."""
        extensions = {ext.lower() for ext in self.config.source_extensions}
        sources = [
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in extensions
        ]
        return sorted(sources, key=natural_sort_key)

    def document_stream(
        self, lines: Iterable[str], sink: TextIO, title: str
    ) -> int:
        """
        Write the Markdown page for one script.

        Each block is written to the sink as soon as its declaration
        line has been read.

        Args:
            lines: Raw lines of the script
            sink: Destination for Markdown text
            title: Page heading

        Returns:
            Number of rendered blocks
        """
        normalizer = LineNormalizer(
            default_dialect=self.config.default_dialect,
            allowed_dialects=self.config.allowed_dialects,
        )
        parser = BlockParser()
        renderer = MarkdownRenderer(normalizer.dialect)

        self._write(sink, renderer.heading(title))

        count = 0
        for raw in lines:
            line = normalizer.feed(raw)
            if line is None:
                renderer.dialect = normalizer.dialect
                continue

            block = parser.feed(line)
            if block is None:
                continue

            self._write(sink, renderer.render(block))
            sink.flush()
            count += 1
            self.logger.block_rendered(block.declared_name, len(block.parameters))

        parser.finish()
        if parser.discarded:
            self.logger.block_discarded(title, parser.discarded)

        if self.config.copyright:
            self._write(sink, renderer.footer(self.config.copyright))

        return count

    def document_file(
        self, source: Path, output: Path, title: str | None = None
    ) -> int:
        """
        Generate the Markdown page for one script file.

        Args:
            source: Script to read
            output: Markdown file to write, replaced if it exists
            title: Page heading, derived from the file name if None

        Returns:
            Number of rendered blocks
        """
        source = Path(source)
        output = Path(output)
        self.logger.set_context(source=str(source))
        self.logger.file_started(str(source), str(output))

        try:
            with open(source, "r", encoding="utf-8") as src, open(
                output, "w", encoding="utf-8"
            ) as sink:
                count = self.document_stream(
                    src, sink, title or self.file_title(source)
                )
        finally:
            self.logger.clear_context()

        self.logger.file_completed(str(source), str(output), count)
        return count

    def generate(self, path: str | Path) -> GenerationResult:
        """
        Document a script or every script in a directory.

        Args:
            path: Script file or directory of scripts

        Returns:
            GenerationResult listing the written files

        Raises:
            SourceNotFoundError: If path does not exist
            OutputExistsError: If an output exists and force is off
        """
        source = Path(path)
        if source.is_dir():
            return self._generate_directory(source)
        if not source.is_file():
            raise SourceNotFoundError(f"No such file or directory: {source}")

        output = self.resolve_output(source)
        self.check_overwrite(output)
        count = self.document_file(source, output, title=self.config.title or None)

        return GenerationResult(files=[str(output)], block_counts={str(output): count})

    def _generate_directory(self, directory: Path) -> GenerationResult:
        output_dir = Path(self.config.output or ".")
        output_dir.mkdir(parents=True, exist_ok=True)

        sources = self.discover_sources(directory)
        if not sources:
            self.logger.warning(
                f"No scripts found in {directory}", event_type="directory.empty"
            )

        result = GenerationResult()
        for source in sources:
            output = output_dir / self.output_name(source)
            self.check_overwrite(output)
            count = self.document_file(source, output)
            result.files.append(str(output))
            result.block_counts[str(output)] = count

        if self.config.table_of_contents:
            result.toc_path = str(self._write_table_of_contents(output_dir, result.files))

        return result

    def _write_table_of_contents(self, output_dir: Path, files: list[str]) -> Path:
        """Write the ToC page into the parent of the output directory."""
        root = output_dir.parent
        toc_path = root / self.config.toc_filename
        self.check_overwrite(toc_path)

        entries = []
        for file in files:
            title = Path(file).name
            if not self.config.keep_extension:
                title = os.path.splitext(title)[0]
            link = Path(os.path.relpath(file, root)).as_posix()
            entries.append((title, link))

        heading = self.config.title or self.config.toc_heading
        with open(toc_path, "w", encoding="utf-8") as sink:
            self._write(sink, MarkdownRenderer.table_of_contents(heading, entries))

        self.logger.info(f"Wrote table of contents {toc_path}", event_type="toc.completed")
        return toc_path

    @staticmethod
    def _write(sink: TextIO, lines: list[str]) -> None:
        for line in lines:
            sink.write(line + "\n")
