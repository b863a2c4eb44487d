"""Logging and correlation-id plumbing for ballotbox.

`configure_structlog` runs once at startup (see ballotbox.bootstrap.logging);
`LoggingMiddleware` sets the correlation id for each HTTP request.
"""

from ballotbox.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from ballotbox.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "set_correlation_id",
]
