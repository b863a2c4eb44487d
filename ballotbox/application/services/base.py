"""Structured logging shared by ballotbox services.

A service calls `_init_logger()` once in `__init__`, then opens one bound
logger per operation:

    log = self._log_operation("cast_vote", election=str(key))
    log.info("vote_cast", voter_count=3)
"""

import structlog

from ballotbox.infrastructure.observability.correlation import get_correlation_id
from ballotbox.infrastructure.observability.logging import get_logger_for_service


class LoggingMixin:
    """Gives a service a `_log` bound to its class name and component.

    Operation loggers add the operation name and the request's correlation
    id on top of that.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "election") -> None:
        self._log = get_logger_for_service(self.__class__.__name__, component)

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Logger for one operation, carrying its name and correlation id."""
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
