"""Structured logging with structlog.

Engine and quiz code log key/value events (``query_executed``,
``query_rejected``, ``quiz_session_completed``, ...). Query text may be
arbitrarily long, so ``query_preview`` fields are shortened by a processor
rather than at every call site.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from sql_quest.core.config import Settings

SERVICE_NAME = "sql-quest"
QUERY_PREVIEW_MAX_CHARS = 200


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag every entry with the service name."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def truncate_query_preview(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Shorten ``query_preview`` and record the full query length."""
    preview = event_dict.get("query_preview")
    if isinstance(preview, str) and len(preview) > QUERY_PREVIEW_MAX_CHARS:
        event_dict["query_preview"] = preview[:QUERY_PREVIEW_MAX_CHARS] + "..."
        event_dict["query_length"] = len(preview)
    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    """Build the processor chain, ending with a console or JSON renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_service_context,
        truncate_query_preview,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the service.

    Development runs on a terminal get coloured console output; everything
    else (production, CI, piped output) gets one JSON object per line.

    Args:
        settings: Application settings. If None, uses cached settings.
    """
    if settings is None:
        from sql_quest.core.config import get_settings

        settings = get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    json_output = not (settings.ENVIRONMENT == "development" and sys.stderr.isatty())

    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.WriteLoggerFactory()
        if json_output
        else structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route uvicorn and other stdlib loggers to the same stream
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, optionally named after the calling module."""
    return structlog.get_logger(name)
