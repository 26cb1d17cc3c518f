"""
Structured logging using structlog.

Every event carries the service name and version, plus the request context
(request_id, path, domain) bound through structlog.contextvars for the
duration of an API request. JSON in production, colored console otherwise.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict

from robotscope.core.config import get_settings

SERVICE_NAME = "robotscope"
REQUEST_ID_HEADER = "X-Request-ID"


def add_severity(logger: Any, method: str, event_dict: EventDict) -> EventDict:
    """Map structlog levels to GCP/Datadog severity levels."""
    event_dict["severity"] = method.upper() if method != "exception" else "ERROR"
    return event_dict


def add_service(logger: Any, method: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", get_settings().APP_VERSION)
    return event_dict


def bind_request_context(**values: Any) -> None:
    """Attach key/values to every event logged for the current request."""
    structlog.contextvars.bind_contextvars(**{k: v for k, v in values.items() if v is not None})


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def configure_logging() -> None:
    settings = get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service,
        add_severity,
    ]

    if settings.LOG_FORMAT == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Server logs (uvicorn) go through stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
