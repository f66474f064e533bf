"""Logging setup for the CLI: structlog events rendered through stdlib logging."""

from __future__ import annotations

import logging
import os
import sys

import structlog

LEVEL_ENV = "NUGET_INSPECTOR_LOG_LEVEL"
FORMAT_ENV = "NUGET_INSPECTOR_LOG_FORMAT"

# Third-party loggers that are only interesting when something breaks
_QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(verbose: bool = False) -> None:
    """Route structlog and stdlib records to one stderr handler.

    ``NUGET_INSPECTOR_LOG_LEVEL`` overrides the level chosen by *verbose*;
    ``NUGET_INSPECTOR_LOG_FORMAT`` selects ``console`` (default) or ``json``.
    Stdout is left for the result path.
    """
    level = os.environ.get(LEVEL_ENV, "DEBUG" if verbose else "INFO").upper()
    log_format = os.environ.get(FORMAT_ENV, "console").lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.getLogger("nuget_inspector").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
