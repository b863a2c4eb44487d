"""Configuration module for ballotbox.

Available Configurations:
- ElectionConfig: Limits applied by the election Operations Layer
"""

from ballotbox.config.election_config import (
    DEFAULT_ELECTION_CONFIG,
    TEST_ELECTION_CONFIG,
    ElectionConfig,
)

__all__ = [
    "ElectionConfig",
    "DEFAULT_ELECTION_CONFIG",
    "TEST_ELECTION_CONFIG",
]
