"""structlog setup for the API, the training CLI and the Streamlit page.

Each entry point calls configure_logging() once with the application
settings. Request handlers wrap their work in request_context() so every
line logged while analyzing a party carries the same request id.

Example:
    >>> from party_optimizer.core.logging import get_logger, request_context
    >>> logger = get_logger(__name__)
    >>> with request_context(event_type="Dragon Fight"):
    ...     logger.info("Analysis complete", party_size=4, success_chance=62)
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from party_optimizer.core.config import get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from party_optimizer.core.config import Settings


# HTTP client, model and server libraries that log every request or tensor op.
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "uvicorn.access", "torch")


def _service_tagger(name: str, version: str) -> Processor:
    def tag_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", name)
        event_dict.setdefault("version", version)
        return event_dict

    return tag_service


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Uses settings.log_level for both, and settings.json_logs to choose
    JSON lines (deployed API) over the coloured console renderer.

    Args:
        settings: Application settings; the global settings by default.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _service_tagger(settings.app_name, settings.app_version),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=level,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, typically get_logger(__name__)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Add fields to every entry logged in the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def request_context(request_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Scope log context to one analysis request.

    Binds a request id (a short random hex string unless one is given) plus
    any extra fields, and clears the context on exit, whether or not the
    request succeeded.

    Args:
        request_id: Id to log under; generated when omitted.
        **fields: Extra fields such as event_type.

    Yields:
        The request id in use.
    """
    request_id = request_id or uuid.uuid4().hex[:12]
    bind_context(request_id=request_id, **fields)
    try:
        yield request_id
    finally:
        clear_context()


__all__ = [
    "QUIET_LOGGERS",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "request_context",
]
