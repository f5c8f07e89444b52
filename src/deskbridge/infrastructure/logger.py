"""Structured logging setup using structlog.

All log output goes to stderr; stdout belongs to the command transport. When the
bridge runs as a sidecar of the desktop host, stderr is a pipe and lines are
rendered as JSON so the host can parse them. On a terminal they are coloured.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def select_renderer(log_format: str | None, is_tty: bool) -> Any:
    """Pick the final processor. DESKBRIDGE_LOG_FORMAT=console|json overrides the TTY guess."""
    fmt = (log_format or "").lower()
    if fmt == "json" or (fmt != "console" and not is_tty):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=is_tty)


def setup_logging() -> structlog.typing.FilteringBoundLogger:
    log_level = _resolve_level(os.environ.get("LOG_LEVEL", "INFO"))
    renderer = select_renderer(os.environ.get("DESKBRIDGE_LOG_FORMAT"), sys.stderr.isatty())

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if isinstance(renderer, structlog.processors.JSONRenderer):
        processors.append(structlog.processors.format_exc_info)
    else:
        processors.append(structlog.dev.set_exc_info)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s")

    return structlog.get_logger()


logger: structlog.typing.FilteringBoundLogger = setup_logging()


def install_exception_hooks() -> None:
    """Send uncaught exceptions to the bridge log instead of a bare traceback."""

    def handle_exception(exc_type, exc_value, exc_traceback):  # type: ignore[no-untyped-def]
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical("Bridge crashed", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception


install_exception_hooks()
