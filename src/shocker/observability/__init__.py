"""
Observability for Shocker.

Provides logging configuration and the logger wrapper used by the
documentation pipeline.
"""

from shocker.observability.logging import (
    HumanReadableFormatter,
    ShockerLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "HumanReadableFormatter",
    "ShockerLogger",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
