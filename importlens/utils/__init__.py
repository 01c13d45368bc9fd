"""importlens utilities package."""

from .logging import configure_logging, logger, reset_logging

__all__ = [
    "configure_logging",
    "logger",
    "reset_logging",
]
