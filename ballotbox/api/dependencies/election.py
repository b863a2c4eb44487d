"""Election API dependencies.

Dependency injection setup for the election Operations Layer. The
singletons below are the process-wide Election Store and clock; a durable
deployment replaces get_election_repository() with a backend implementing
ElectionRepositoryProtocol.

Caller identity is supplied by the authentication layer in front of this
API as the X-Caller-Identity header; it is treated as an opaque token.
"""

from fastapi import Header, HTTPException

from ballotbox.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from ballotbox.application.ports.time_authority import TimeAuthorityProtocol
from ballotbox.application.services.election_service import ElectionService
from ballotbox.config.election_config import ElectionConfig
from ballotbox.domain.models.identity import Identity
from ballotbox.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from ballotbox.infrastructure.stubs.election_repository_stub import (
    ElectionRepositoryStub,
)

# Header carrying the pre-authenticated caller identity
CALLER_IDENTITY_HEADER = "X-Caller-Identity"

_election_repository: ElectionRepositoryStub | None = None
_time_authority: SystemTimeAuthority | None = None
_election_config: ElectionConfig | None = None
_election_service: ElectionService | None = None


def get_election_config() -> ElectionConfig:
    """Get election configuration.

    Returns singleton ElectionConfig loaded from environment.
    """
    global _election_config
    if _election_config is None:
        _election_config = ElectionConfig.from_environment()
    return _election_config


def get_election_repository() -> ElectionRepositoryProtocol:
    """Get the Election Store (in-memory singleton)."""
    global _election_repository
    if _election_repository is None:
        _election_repository = ElectionRepositoryStub()
    return _election_repository


def get_time_authority() -> TimeAuthorityProtocol:
    """Get the system clock (singleton)."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_election_service() -> ElectionService:
    """Get election service instance.

    Creates the service with:
    - The Election Store singleton
    - The system time authority
    - ElectionConfig from environment

    Returns:
        ElectionService instance.
    """
    global _election_service
    if _election_service is None:
        _election_service = ElectionService(
            repository=get_election_repository(),
            time_authority=get_time_authority(),
            config=get_election_config(),
        )
    return _election_service


async def get_caller_identity(
    x_caller_identity: str | None = Header(default=None, alias=CALLER_IDENTITY_HEADER),
) -> Identity:
    """Extract the caller identity from the request.

    Raises:
        HTTPException: 401 if the header is missing or empty.
    """
    if not x_caller_identity:
        raise HTTPException(
            status_code=401,
            detail={
                "type": "urn:ballotbox:error:missing-identity",
                "title": "Missing Caller Identity",
                "status": 401,
                "detail": f"{CALLER_IDENTITY_HEADER} header is required",
            },
        )
    return Identity(x_caller_identity)


def reset_election_dependencies() -> None:
    """Drop all singletons so the next request builds fresh ones."""
    global _election_repository, _time_authority, _election_config, _election_service
    _election_repository = None
    _time_authority = None
    _election_config = None
    _election_service = None
