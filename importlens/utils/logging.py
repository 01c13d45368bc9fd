"""Logging for importlens using Loguru with Pino-compatible output.

importlens is a library, so its records are disabled until the host
application opts in. Modules log through the shared loguru logger:

Usage:
    from importlens.utils.logging import logger
    logger.debug("Debug message")

Applications that want the engine's output call configure_logging():

    from importlens.utils.logging import configure_logging
    handler_ids = configure_logging(level="DEBUG")

Environment Variables (read when configure_logging() gets no arguments):
    IMPORTLENS_LOG_LEVEL: TRACE|DEBUG|INFO|WARNING|ERROR (default: INFO)
    IMPORTLENS_LOG_JSON: 0|1 (default: 0, human-readable)
    IMPORTLENS_LOG_FILE: path to an NDJSON log file (optional)
"""

import json
import os
import sys

from loguru import logger

from ..config import (
    DEFAULT_LOG_LEVEL,
    LOG_FILE_ENV,
    LOG_JSON_ENV,
    LOG_LEVEL_ENV,
    LOG_LEVEL_NUMBERS,
)

PACKAGE = "importlens"

# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)


def _only_package(record) -> bool:
    return record["name"].split(".")[0] == PACKAGE


def pino_record(record) -> dict:
    """Convert a loguru record into a Pino-compatible dict.

    Output format:
    {"level":20,"time":1715629847123,"msg":"...","pid":12345,"language":"python"}
    """
    pino_log = {
        "level": LOG_LEVEL_NUMBERS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }

    # Add any extra context fields
    for key, value in record["extra"].items():
        pino_log[key] = value

    # Add exception info if present (Pino err format)
    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return pino_log


def pino_compatible_sink(message):
    """Write Pino-format NDJSON to stdout (machine logs go to stdout)."""
    # CRITICAL: Never call logger.* inside a sink - causes infinite recursion
    sys.stdout.write(json.dumps(pino_record(message.record), default=str) + "\n")
    sys.stdout.flush()


def _file_sink(path: str):
    def _file_pino_sink(message):
        """Append Pino-format JSON to the configured log file."""
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(pino_record(message.record), default=str) + "\n")

    return _file_pino_sink


def configure_logging(
    level: str | None = None,
    json_mode: bool | None = None,
    log_file: str | None = None,
) -> list[int]:
    """Enable importlens logging and add its sinks.

    Args:
        level: Minimum level for the console sink
        json_mode: NDJSON on stdout instead of human-readable stderr
        log_file: Optional NDJSON file that captures DEBUG and above

    Returns:
        Handler ids, to pass to reset_logging()
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    level = level.upper()
    if json_mode is None:
        json_mode = os.environ.get(LOG_JSON_ENV, "0") == "1"
    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV) or None

    logger.enable(PACKAGE)
    handler_ids = []

    # Console handler - choose format based on JSON mode
    if json_mode:
        handler_ids.append(
            logger.add(pino_compatible_sink, level=level, filter=_only_package, colorize=False)
        )
    else:
        handler_ids.append(
            logger.add(
                sys.stderr,
                level=level,
                format=_human_format,
                filter=_only_package,
                colorize=None,  # Auto-detect: colors if TTY, plain if piped
            )
        )

    # Optional file handler (always NDJSON for machine parsing)
    if log_file:
        handler_ids.append(logger.add(_file_sink(log_file), level="DEBUG", filter=_only_package))

    return handler_ids


def reset_logging(handler_ids: list[int]):
    """Remove handlers added by configure_logging() and silence importlens again."""
    for handler_id in handler_ids:
        try:
            logger.remove(handler_id)
        except ValueError:
            pass  # Already removed
    logger.disable(PACKAGE)


__all__ = [
    "logger",
    "configure_logging",
    "pino_compatible_sink",
    "pino_record",
    "reset_logging",
]
