"""
Configuration for Shocker.

Provides the settings that control how documentation is generated:
headings, output location, overwrite policy, footer and the dialects
and file types that are recognized.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

DEFAULT_DIALECT = "sh"
ALLOWED_DIALECTS = ("bash", "sh", "zsh")


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be used."""

    pass


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _text(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f'"{key}" must be a string, got {value!r}')
    return value


def _flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f'"{key}" must be true or false, got {value!r}')
    return value


def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    """Read a list setting, accepting a comma-separated string as well."""
    value = data.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return _split_list(value)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f'"{key}" must be a list of strings, got {value!r}')
    return list(value)


@dataclass
class ShockerConfig:
    """Settings for a documentation run."""

    title: str = ""  # File heading, or ToC heading for directories
    output: str = ""
    force: bool = False
    keep_extension: bool = False
    copyright: str = ""
    table_of_contents: bool = False
    capitalize: bool = False
    default_dialect: str = DEFAULT_DIALECT
    allowed_dialects: list[str] = field(default_factory=lambda: list(ALLOWED_DIALECTS))
    source_extensions: list[str] = field(
        default_factory=lambda: [".sh", ".bash", ".zsh"]
    )
    toc_filename: str = "Home.md"
    toc_heading: str = "Table of contents"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "output": self.output,
            "force": self.force,
            "keep_extension": self.keep_extension,
            "copyright": self.copyright,
            "table_of_contents": self.table_of_contents,
            "capitalize": self.capitalize,
            "default_dialect": self.default_dialect,
            "allowed_dialects": list(self.allowed_dialects),
            "source_extensions": list(self.source_extensions),
            "toc_filename": self.toc_filename,
            "toc_heading": self.toc_heading,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShockerConfig:
        """
        Create from dictionary.

        Raises:
            ConfigurationError: On unknown keys or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        defaults = cls()
        return cls(
            title=_text(data, "title", defaults.title).strip(),
            output=_text(data, "output", defaults.output),
            force=_flag(data, "force", defaults.force),
            keep_extension=_flag(data, "keep_extension", defaults.keep_extension),
            copyright=_text(data, "copyright", defaults.copyright).strip(),
            table_of_contents=_flag(
                data, "table_of_contents", defaults.table_of_contents
            ),
            capitalize=_flag(data, "capitalize", defaults.capitalize),
            default_dialect=_text(data, "default_dialect", defaults.default_dialect),
            allowed_dialects=_string_list(
                data, "allowed_dialects", defaults.allowed_dialects
            ),
            source_extensions=_string_list(
                data, "source_extensions", defaults.source_extensions
            ),
            toc_filename=_text(data, "toc_filename", defaults.toc_filename),
            toc_heading=_text(data, "toc_heading", defaults.toc_heading),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ShockerConfig:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str) -> ShockerConfig:
        """
        Load configuration from a JSON or YAML file.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            ShockerConfig instance

        Raises:
            ConfigurationError: If the file content is not a valid configuration
        """
        path = os.path.expanduser(path)
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith(".json"):
                try:
                    data = json.load(f)
                except (json.JSONDecodeError, UnicodeDecodeError) as e:
                    raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
            else:
                import yaml

                try:
                    data = yaml.safe_load(f)
                except (yaml.YAMLError, UnicodeDecodeError) as e:
                    raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a mapping")
        return cls.from_dict(data)

    def save(self, path: str) -> None:
        """Save configuration to file."""
        path = os.path.expanduser(path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if path.endswith(".json"):
                json.dump(self.to_dict(), f, indent=2)
            else:
                import yaml

                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)

    def merge(self, overrides: dict[str, Any]) -> ShockerConfig:
        """
        Return a copy with overrides applied.

        Values that are None, False or empty are treated as "not given"
        and leave the current setting untouched, so unset CLI flags never
        clear values coming from a configuration file.

        Args:
            overrides: Field names mapped to new values

        Returns:
            New ShockerConfig instance
        """
        known = {f.name for f in fields(self)}
        changes = {
            key: value
            for key, value in overrides.items()
            if key in known and value not in (None, False, "", [])
        }
        return replace(self, **changes)


def load_config_from_env() -> ShockerConfig:
    """
    Load configuration from environment variables.

    Environment variables:
        SHOCKER_CONFIG_FILE: Path to configuration file
        SHOCKER_COPYRIGHT: Footer text appended to every page
        SHOCKER_DEFAULT_DIALECT: Fallback fence language
        SHOCKER_ALLOWED_DIALECTS: Comma-separated recognized interpreters
        SHOCKER_SOURCE_EXTENSIONS: Comma-separated file extensions

    Returns:
        ShockerConfig instance
    """
    config_file = os.getenv("SHOCKER_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        config = ShockerConfig.from_file(config_file)
    else:
        config = ShockerConfig()

    copyright_text = os.getenv("SHOCKER_COPYRIGHT")
    if copyright_text:
        config.copyright = copyright_text.strip()

    dialect = os.getenv("SHOCKER_DEFAULT_DIALECT")
    if dialect:
        config.default_dialect = dialect.strip()

    dialects = os.getenv("SHOCKER_ALLOWED_DIALECTS")
    if dialects:
        config.allowed_dialects = _split_list(dialects)

    extensions = os.getenv("SHOCKER_SOURCE_EXTENSIONS")
    if extensions:
        config.source_extensions = _split_list(extensions)

    return config
