"""Election configuration.

This module defines configuration for the election Operations Layer with
environment variable overrides.

Environment Variables:
- BALLOTBOX_MAX_DURATION_SECONDS: Longest voting window accepted, 0 = unlimited (default: 0)
- BALLOTBOX_MAX_NAME_LENGTH: Longest candidate name accepted, 0 = unlimited (default: 0)
- BALLOTBOX_MAX_PROPOSAL_LENGTH: Longest proposal text accepted, 0 = unlimited (default: 0)
- BALLOTBOX_ENVIRONMENT: 'production' (JSON logs) or 'development' (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

VALID_ENVIRONMENTS: frozenset[str] = frozenset({"production", "development"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ElectionConfig:
    """Configuration for election operations.

    Attributes:
        max_duration_seconds: Upper bound for start_election durations.
                              0 disables the bound.
        max_name_length: Upper bound for candidate names. 0 disables it.
        max_proposal_length: Upper bound for candidate proposals.
                             0 disables it.
        environment: Logging environment ('production' or 'development').
    """

    max_duration_seconds: int = 0
    max_name_length: int = 0
    max_proposal_length: int = 0
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_duration_seconds < 0:
            raise ValueError(
                "max_duration_seconds must be non-negative, "
                f"got {self.max_duration_seconds}"
            )
        if self.max_name_length < 0:
            raise ValueError(
                f"max_name_length must be non-negative, got {self.max_name_length}"
            )
        if self.max_proposal_length < 0:
            raise ValueError(
                "max_proposal_length must be non-negative, "
                f"got {self.max_proposal_length}"
            )
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )

    @property
    def duration_limit(self) -> int | None:
        """max_duration_seconds, or None when unbounded."""
        return self.max_duration_seconds or None

    @property
    def name_limit(self) -> int | None:
        return self.max_name_length or None

    @property
    def proposal_limit(self) -> int | None:
        return self.max_proposal_length or None

    @classmethod
    def from_environment(cls) -> "ElectionConfig":
        """Create config from environment variables with defaults.

        Returns:
            ElectionConfig with values from environment or defaults.
        """
        return cls(
            max_duration_seconds=_get_int_env("BALLOTBOX_MAX_DURATION_SECONDS", 0),
            max_name_length=_get_int_env("BALLOTBOX_MAX_NAME_LENGTH", 0),
            max_proposal_length=_get_int_env("BALLOTBOX_MAX_PROPOSAL_LENGTH", 0),
            environment=os.environ.get("BALLOTBOX_ENVIRONMENT", "production"),
        )


# Default production config
DEFAULT_ELECTION_CONFIG = ElectionConfig()

# Testing config with every opt-in limit enabled
TEST_ELECTION_CONFIG = ElectionConfig(
    max_duration_seconds=86_400,
    max_name_length=32,
    max_proposal_length=200,
    environment="development",
)
