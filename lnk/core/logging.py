"""Logging for the lnk CLI — structlog rendered through stdlib handlers on stderr."""

from __future__ import annotations

import logging
import logging.config

import structlog

from lnk.core.config import Settings


def _processors(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    # Console lines sit next to the CLI's own output; timestamps only for machines.
    if json_output:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    return processors


def setup_logging(settings: Settings, verbose: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    ``verbose`` forces DEBUG regardless of ``LNK_LOG_LEVEL``. stdout stays
    reserved for the per-module lines printed by the CLI.
    """
    level = "DEBUG" if verbose else settings.log_level
    json_output = settings.log_format == "json"
    pre_chain = _processors(json_output)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "lnk": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "lnk",
                },
            },
            "root": {"handlers": ["stderr"], "level": level},
            "loggers": {"asyncio": {"level": "WARNING"}},
        }
    )
