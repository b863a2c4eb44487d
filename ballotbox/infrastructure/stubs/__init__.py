"""In-memory implementations of application ports."""

from ballotbox.infrastructure.stubs.election_repository_stub import (
    ElectionRepositoryStub,
)

__all__: list[str] = ["ElectionRepositoryStub"]
