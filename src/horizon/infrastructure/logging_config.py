"""structlog configuration shared by the CLI and library integrators."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog (and the stdlib root logger used by httpx).

    Args:
        level: Minimum level name, e.g. "DEBUG" or "WARNING"
        json_logs: Render one JSON object per line instead of console output
    """
    level_num = logging.getLevelName(level.upper())
    if not isinstance(level_num, int):
        level_num = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level_num)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
