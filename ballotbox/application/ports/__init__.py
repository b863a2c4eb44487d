"""Application ports (interfaces) for ballotbox.

Ports define the contracts the Operations Layer depends on. Infrastructure
provides the implementations.
"""

from ballotbox.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from ballotbox.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "ElectionRepositoryProtocol",
    "TimeAuthorityProtocol",
]
