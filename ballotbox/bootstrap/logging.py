"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from ballotbox.config.election_config import ElectionConfig
from ballotbox.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(environment=environment)


def configure_logging_from_config(config: ElectionConfig) -> None:
    """Configure structlog using the environment named by an ElectionConfig."""
    configure_structlog(config.environment)


__all__ = ["configure_logging_from_config", "configure_structlog"]
