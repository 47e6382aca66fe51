"""
Line normalization for Shocker.

Canonicalizes raw source lines before they reach the block parser and
detects the script's interpreter from its first line.
"""

from __future__ import annotations

import os
import re

from shocker.config.settings import ALLOWED_DIALECTS, DEFAULT_DIALECT

INTERPRETER_MARKER = "#!"

_SPACE_RUN = re.compile(r" {2,}")


class LineNormalizer:
    """Normalize lines and track the interpreter dialect of one file."""

    def __init__(
        self,
        default_dialect: str = DEFAULT_DIALECT,
        allowed_dialects: tuple[str, ...] | list[str] = ALLOWED_DIALECTS,
    ):
        """
        Initialize normalizer.

        Args:
            default_dialect: Fence language used when no interpreter is recognized
            allowed_dialects: Interpreter names accepted as fence languages
        """
        self.default_dialect = default_dialect
        self.allowed_dialects = tuple(allowed_dialects)
        self.dialect = default_dialect
        self.line_number = 0

    @staticmethod
    def normalize(raw: str) -> str:
        """Expand tabs to single spaces, collapse space runs and trim."""
        line = raw.replace("\t", " ")
        line = _SPACE_RUN.sub(" ", line)
        return line.strip()

    def resolve_dialect(self, interpreter_line: str) -> str:
        """
        Map an interpreter line to a fence language.

        "#!/bin/bash" gives "bash", "#!/usr/bin/env zsh" gives "zsh".
        Anything outside the allow-list gives the default dialect.

        Args:
            interpreter_line: Normalized first line starting with "#!"

        Returns:
            Dialect tag
        """
        tokens = interpreter_line[len(INTERPRETER_MARKER):].split()
        if not tokens:
            return self.default_dialect

        program = os.path.basename(tokens[0])
        if program == "env":
            args = [t for t in tokens[1:] if not t.startswith("-")]
            program = os.path.basename(args[0]) if args else ""

        if program in self.allowed_dialects:
            return program
        return self.default_dialect

    def feed(self, raw: str) -> str | None:
        """
        Normalize the next line of the file.

        Returns None for the interpreter line, which is consumed here
        and never handed on to the parser.
        """
        self.line_number += 1
        line = self.normalize(raw)

        if self.line_number == 1 and line.startswith(INTERPRETER_MARKER):
            self.dialect = self.resolve_dialect(line)
            return None

        return line
