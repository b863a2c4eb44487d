"""Election repository stub implementation.

This module provides an in-memory implementation of
ElectionRepositoryProtocol. It is the store used by the API wiring and by
tests; a durable backend would implement the same protocol.
"""

from __future__ import annotations

import asyncio

from ballotbox.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from ballotbox.domain.errors.election import (
    ElectionAlreadyExistsError,
    ElectionNotFoundError,
)
from ballotbox.domain.models.election import Election, ElectionKey


class ElectionRepositoryStub(ElectionRepositoryProtocol):
    """In-memory stub implementation of ElectionRepositoryProtocol.

    Snapshots are immutable, so get() hands out the stored object directly
    and readers never see a half-applied write.

    Attributes:
        _elections: Dictionary mapping ElectionKey to the current snapshot.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._elections: dict[ElectionKey, Election] = {}
        # Makes the exists-then-insert in create() atomic
        self._create_lock = asyncio.Lock()

    async def create(self, election: Election) -> None:
        """Store a new election.

        Raises:
            ElectionAlreadyExistsError: If election.key is already taken.
        """
        async with self._create_lock:
            if election.key in self._elections:
                raise ElectionAlreadyExistsError(election.key)
            self._elections[election.key] = election

    async def get(self, key: ElectionKey) -> Election | None:
        """Retrieve the current snapshot, or None if absent."""
        return self._elections.get(key)

    async def replace(self, election: Election) -> None:
        """Commit a new snapshot for an existing election.

        Raises:
            ElectionNotFoundError: If no election exists for election.key.
        """
        if election.key not in self._elections:
            raise ElectionNotFoundError(election.key)
        self._elections[election.key] = election

    async def exists(self, key: ElectionKey) -> bool:
        return key in self._elections

    # Test helpers

    def clear(self) -> None:
        """Remove all stored elections."""
        self._elections.clear()

    def __len__(self) -> int:
        return len(self._elections)
