"""Structured logging configuration for Shift.

Uses structlog for key/value logging. Output format, level and destination
come from a ``ShiftConfig``.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from shift.config import ShiftConfig

# Processors shared by console and JSON output
_BASE_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
)


def _open_stream(config: ShiftConfig) -> TextIO:
    if config.log_file is None:
        return sys.stderr
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    return open(config.log_file, "a")  # noqa: SIM115


def _renderer(config: ShiftConfig) -> structlog.types.Processor:
    if config.json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=config.log_file is None)


def configure_logging(config: ShiftConfig | None = None) -> None:
    """Configure stdlib logging and structlog from ``config``.

    Args:
        config: Settings to apply; ``ShiftConfig()`` defaults when omitted
            (INFO level, console output on stderr)
    """
    config = config or ShiftConfig()

    logging.basicConfig(
        format="%(message)s",
        stream=_open_stream(config),
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=[*_BASE_PROCESSORS, _renderer(config)],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger; ``name`` is typically ``__name__``."""
    return structlog.get_logger(name)
