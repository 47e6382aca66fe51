"""
Pytest configuration and fixtures for Shocker tests.

This module provides sample scripts used across unit and integration tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from shocker.config import ShockerConfig


ADD_SCRIPT = """#!/bin/bash

#/
# Adds two numbers
#
# @param int $1 First number
# @param int $2 Second number
# @return int Sum of both numbers
#/
function add() {
    echo $(($1 + $2))
}
"""

ADD_MARKDOWN = [
    "## add()",
    "",
    "```bash",
    "add() ",
    "```",
    "",
    "*Adds two numbers*",
    "",
    "| $1 (int) | First number  |",
    "| $2 (int) | Second number |",
    "",
    "**return (int)** - Sum of both numbers",
    "",
]


@pytest.fixture
def add_script() -> str:
    """Return a script with one fully documented function."""
    return ADD_SCRIPT


@pytest.fixture
def add_markdown() -> list[str]:
    """Return the Markdown section expected for ADD_SCRIPT."""
    return list(ADD_MARKDOWN)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a script below tmp_path."""

    def _write(name: str, content: str, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def config() -> ShockerConfig:
    """Return a default configuration."""
    return ShockerConfig()
