"""
Pytest configuration and shared fixtures for ballotbox tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Time-dependent tests use FakeTimeAuthority, never the wall clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from ballotbox.application.services.election_service import ElectionService
from ballotbox.config.election_config import TEST_ELECTION_CONFIG
from ballotbox.domain.models.identity import Identity
from ballotbox.infrastructure.stubs.election_repository_stub import (
    ElectionRepositoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from ballotbox import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Controllable clock starting at 1000."""
    return FakeTimeAuthority(start=1000)


@pytest.fixture
def election_repository() -> ElectionRepositoryStub:
    """Fresh in-memory Election Store."""
    return ElectionRepositoryStub()


@pytest.fixture
def election_service(
    election_repository: ElectionRepositoryStub,
    fake_time_authority: FakeTimeAuthority,
) -> ElectionService:
    """ElectionService wired to the stub store and fake clock."""
    return ElectionService(
        repository=election_repository,
        time_authority=fake_time_authority,
        config=TEST_ELECTION_CONFIG,
    )


@pytest.fixture
def owner() -> Identity:
    return Identity("owner-alice")


@pytest.fixture
def voters() -> list[Identity]:
    """Four distinct voter identities."""
    return [Identity(f"voter-{i}") for i in range(1, 5)]
