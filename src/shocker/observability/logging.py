"""
Logging configuration for Shocker.

Provides human-readable and structured (JSON) log output. Logs always
go to a stream separate from the generated Markdown.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

_RESERVED_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    )
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.

    Useful when documentation runs happen in CI and logs are collected.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        extra_fields: dict[str, Any] | None = None,
    ):
        """
        Initialize structured formatter.

        Args:
            include_timestamp: Include timestamp in output
            include_level: Include log level in output
            include_logger: Include logger name in output
            extra_fields: Additional fields to include in every log
        """
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = (
                datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            )

        if self.include_level:
            log_data["level"] = record.levelname.lower()

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through "extra"
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        log_data.update(self.extra_fields)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter that outputs human-readable logs for terminal use."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(
        self,
        use_colors: bool = True,
        include_timestamp: bool = False,
        include_level: bool = True,
    ):
        """
        Initialize human-readable formatter.

        Args:
            use_colors: Use ANSI colors in output
            include_timestamp: Include timestamp in output
            include_level: Include log level in output
        """
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()
        self.include_timestamp = include_timestamp
        self.include_level = include_level

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        parts = []

        if self.include_timestamp:
            timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            parts.append(f"[{timestamp}]")

        if self.include_level:
            level = record.levelname
            if self.use_colors and level in self.COLORS:
                level = f"{self.COLORS[level]}{level}{self.RESET}"
            parts.append(f"{level:>8}")

        parts.append(f"{record.name}:")
        parts.append(record.getMessage())

        output = " ".join(parts)

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class ShockerLogger:
    """
    Wrapper around Python logging with documentation run events.

    Context set with set_context() is attached to every record, which
    StructuredFormatter emits as extra JSON fields.
    """

    def __init__(self, name: str, level: int | None = None):
        """
        Initialize Shocker logger.

        Args:
            name: Logger name
            level: Log level, inherited from the "shocker" logger if None
        """
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)
        self._context: dict[str, Any] = {}

    def set_context(self, **kwargs: Any) -> None:
        """Set persistent context fields for all logs."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        """Clear context fields."""
        self._context.clear()

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra = {**self._context, **kwargs}
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def file_started(self, source: str, output: str) -> None:
        """Log the start of a source file."""
        self.debug(
            f"Documenting {source}",
            event_type="file.started",
            source=source,
            output=output,
        )

    def block_rendered(self, name: str, parameter_count: int) -> None:
        """Log a rendered DocBlock."""
        self.debug(
            f"Rendered block {name or '<unnamed>'}",
            event_type="block.rendered",
            block_name=name,
            parameter_count=parameter_count,
        )

    def block_discarded(self, source: str, count: int) -> None:
        """Log blocks dropped because no declaration followed them."""
        self.debug(
            f"Dropped {count} unterminated block(s) in {source}",
            event_type="block.discarded",
            source=source,
            discarded=count,
        )

    def file_completed(self, source: str, output: str, block_count: int) -> None:
        """Log a finished source file."""
        self.info(
            f"Wrote {output} ({block_count} block(s))",
            event_type="file.completed",
            source=source,
            output=output,
            block_count=block_count,
        )


def configure_logging(
    level: str = "WARNING",
    format: str = "human",
    output: str = "stderr",
    extra_fields: dict[str, Any] | None = None,
) -> None:
    """
    Configure logging for Shocker.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format (human, json)
        output: Output destination (stderr, stdout)
        extra_fields: Extra fields to include in structured logs
    """
    root_logger = logging.getLogger("shocker")
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    if output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stderr)

    if format == "json":
        formatter: logging.Formatter = StructuredFormatter(extra_fields=extra_fields)
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> ShockerLogger:
    """
    Get a Shocker logger instance.

    Args:
        name: Logger name relative to "shocker"

    Returns:
        ShockerLogger instance
    """
    return ShockerLogger(f"shocker.{name}")


# Configure logging from environment on import
_log_level = os.getenv("SHOCKER_LOG_LEVEL", "WARNING")
_log_format = os.getenv("SHOCKER_LOG_FORMAT", "human")
configure_logging(level=_log_level, format=_log_format)
