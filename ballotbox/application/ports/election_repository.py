"""Election repository port (Election Store).

This module defines the abstract interface for election storage. Each
election is stored as an immutable snapshot under its ElectionKey; a
mutation commits by replacing the whole snapshot.

Developer Golden Rules:
1. ONE ELECTION PER KEY - create() rejects an existing key, never overwrites
2. FAIL LOUD - Repository raises on errors, never returns partial results
3. LOCKING IS THE SERVICE'S JOB - The service serializes writers per key;
   the repository only guarantees create() is atomic
"""

from __future__ import annotations

from typing import Protocol

from ballotbox.domain.models.election import Election, ElectionKey


class ElectionRepositoryProtocol(Protocol):
    """Protocol for election storage operations.

    Implementations may use in-memory storage or a durable backend that
    provides crash-consistent writes.

    Methods:
        create: Store a new election under an unused key
        get: Retrieve the current snapshot for a key
        replace: Commit a new snapshot for an existing key
        exists: Check whether a key is taken
    """

    async def create(self, election: Election) -> None:
        """Store a new election.

        Args:
            election: The freshly created election.

        Raises:
            ElectionAlreadyExistsError: If election.key is already taken.
        """
        ...

    async def get(self, key: ElectionKey) -> Election | None:
        """Retrieve the current snapshot of an election.

        Args:
            key: The election key.

        Returns:
            The election if found, None otherwise.
        """
        ...

    async def replace(self, election: Election) -> None:
        """Commit a new snapshot for an existing election.

        Args:
            election: The new snapshot; its key selects the record.

        Raises:
            ElectionNotFoundError: If no election exists for election.key.
        """
        ...

    async def exists(self, key: ElectionKey) -> bool:
        """Check whether an election exists for a key."""
        ...
