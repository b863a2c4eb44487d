"""structlog setup for ballotbox.

`production` renders one JSON object per event, `development` renders
colored console lines. Election events look like:

    {"event": "vote_cast", "level": "info", "service": "ElectionService",
     "component": "election", "operation": "cast_vote",
     "election": "alice/board", "voter_count": 3, ...}

The threshold comes from LOG_LEVEL (INFO when unset or unknown).
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from ballotbox.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Install the ballotbox processor chain. Call once at startup."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if environment == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "election"
) -> structlog.BoundLogger:
    """Logger pre-bound with the emitting service and its component."""
    return structlog.get_logger().bind(service=service_name, component=component)
