"""Election Service - the Operations Layer of a single election.

This service exposes the four mutating actions (create, add-candidate,
start, cast-vote) and the queries (candidate lookup, vote tally, phase,
candidate listing) over the Election Store.

Developer Golden Rules:
1. ONE WRITER PER ELECTION - Every mutation runs under the election's lock
2. CLOCK ON ENTRY - Read the time authority once, after acquiring the lock
3. VALIDATE THEN COMMIT - Build the new snapshot, commit it in one replace()
4. FAIL LOUD - Log the rejection and re-raise; never retry
5. READS TAKE NO LOCK - Snapshots are immutable, so reads are consistent
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from ballotbox.application.ports.election_repository import (
    ElectionRepositoryProtocol,
)
from ballotbox.application.ports.time_authority import TimeAuthorityProtocol
from ballotbox.application.services.base import LoggingMixin
from ballotbox.config.election_config import DEFAULT_ELECTION_CONFIG, ElectionConfig
from ballotbox.domain.errors.election import (
    ElectionError,
    ElectionNotFoundError,
    InvalidCandidateError,
    InvalidDurationError,
)
from ballotbox.domain.models.election import Election, ElectionKey, ElectionPhase
from ballotbox.domain.models.identity import Identity


@dataclass(frozen=True)
class CandidateSummary:
    """Public view of an enrolled candidate (no vote count).

    Attributes:
        id: Candidate id.
        name: Candidate name.
        proposal: Candidate proposal.
    """

    id: int
    name: str
    proposal: str


class ElectionService(LoggingMixin):
    """Service enforcing the election lifecycle.

    Attributes:
        _repository: Election Store.
        _time: Time authority read once per operation.
        _config: Limits on durations and candidate text.
        _locks: One asyncio.Lock per existing election (single writer).
    """

    def __init__(
        self,
        repository: ElectionRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ElectionConfig | None = None,
    ) -> None:
        """Initialize the election service.

        Args:
            repository: Store holding election snapshots.
            time_authority: Clock used to derive the election phase.
            config: Operation limits. Defaults to DEFAULT_ELECTION_CONFIG.
        """
        self._repository = repository
        self._time = time_authority
        self._config = config or DEFAULT_ELECTION_CONFIG
        self._locks: dict[ElectionKey, asyncio.Lock] = {}
        self._init_logger()

    async def _lock_for(self, key: ElectionKey) -> asyncio.Lock:
        """Return the writer lock of an existing election.

        Raises:
            ElectionNotFoundError: If no election exists for the key.
        """
        lock = self._locks.get(key)
        if lock is None:
            await self.locate(key)
            lock = self._locks.setdefault(key, asyncio.Lock())
        return lock

    # =========================================================================
    # Election Store
    # =========================================================================

    async def create_election(self, owner: Identity, name: str) -> ElectionKey:
        """Create the election `name` owned by `owner`.

        Args:
            owner: Identity that becomes the election owner.
            name: Election name, unique per owner.

        Returns:
            The key (handle) of the new election.

        Raises:
            ElectionAlreadyExistsError: If the key is already taken.
        """
        log = self._log_operation("create_election", owner=str(owner), name=name)
        election = Election.create(owner=owner, name=name)
        try:
            await self._repository.create(election)
        except ElectionError as e:
            log.warning("election_creation_rejected", kind=e.kind.value, reason=str(e))
            raise
        self._locks.setdefault(election.key, asyncio.Lock())
        log.info("election_created", election=str(election.key))
        return election.key

    async def locate(self, key: ElectionKey) -> Election:
        """Resolve a key to its current snapshot.

        Raises:
            ElectionNotFoundError: If no election exists for the key.
        """
        election = await self._repository.get(key)
        if election is None:
            raise ElectionNotFoundError(key)
        return election

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add_candidate(
        self,
        caller: Identity,
        key: ElectionKey,
        name: str,
        proposal: str,
    ) -> int:
        """Enroll a candidate while the election has not started.

        Returns:
            The id assigned to the candidate.

        Raises:
            ElectionNotFoundError: If the election does not exist.
            NotElectionOwnerError: If caller is not the owner.
            EnrollmentClosedError: If the election already started.
            InvalidCandidateError: If a configured length limit is exceeded.
        """
        log = self._log_operation(
            "add_candidate",
            election=str(key),
            caller=str(caller),
            name_length=len(name),
            proposal_length=len(proposal),
        )
        try:
            async with await self._lock_for(key):
                election = await self.locate(key)
                now = self._time.now()
                updated, candidate = election.enroll(caller, name, proposal, now)
                self._validate_candidate_text(name, proposal)
                await self._repository.replace(updated)
        except ElectionError as e:
            log.warning("candidate_rejected", kind=e.kind.value, reason=str(e))
            raise

        log.info("candidate_added", candidate_id=candidate.id)
        return candidate.id

    async def start_election(
        self,
        caller: Identity,
        key: ElectionKey,
        duration: int,
    ) -> int:
        """Open the voting window for `duration` clock units.

        Returns:
            The expiration of the voting window.

        Raises:
            ElectionNotFoundError: If the election does not exist.
            NotElectionOwnerError: If caller is not the owner.
            ElectionAlreadyStartedError: If the election was ever started.
            InvalidDurationError: If duration is not positive or exceeds the
                configured maximum.
        """
        log = self._log_operation(
            "start_election", election=str(key), caller=str(caller), duration=duration
        )
        try:
            async with await self._lock_for(key):
                election = await self.locate(key)
                now = self._time.now()
                updated = election.start(caller, duration, now)
                limit = self._config.duration_limit
                if limit is not None and duration > limit:
                    raise InvalidDurationError(duration, limit)
                await self._repository.replace(updated)
        except ElectionError as e:
            log.warning("start_rejected", kind=e.kind.value, reason=str(e))
            raise

        log.info("election_started", started_at=now, expiration=updated.expiration)
        return updated.expiration

    async def cast_vote(
        self,
        caller: Identity,
        key: ElectionKey,
        candidate_id: int,
    ) -> None:
        """Record caller's vote for a candidate.

        The voter record and the candidate's count are committed together in
        one snapshot; on any failure neither changes.

        Raises:
            ElectionNotFoundError: If the election does not exist.
            DuplicateVoteError: If caller already voted.
            CandidateNotFoundError: If candidate_id is not enrolled.
            VotingNotOpenError: If the election is not open.
        """
        log = self._log_operation(
            "cast_vote", election=str(key), caller=str(caller), candidate_id=candidate_id
        )
        try:
            async with await self._lock_for(key):
                election = await self.locate(key)
                now = self._time.now()
                updated = election.record_vote(caller, candidate_id, now)
                await self._repository.replace(updated)
        except ElectionError as e:
            log.warning("vote_rejected", kind=e.kind.value, reason=str(e))
            raise

        log.info("vote_cast", voter_count=len(updated.voters))

    # =========================================================================
    # Queries
    # =========================================================================

    async def status(self, key: ElectionKey) -> tuple[Election, ElectionPhase]:
        """Return a snapshot and its phase from one store read and one clock read.

        Raises:
            ElectionNotFoundError: If the election does not exist.
        """
        election = await self.locate(key)
        return election, election.phase_at(self._time.now())

    async def check_candidates(
        self, key: ElectionKey, candidate_id: int
    ) -> tuple[str, str]:
        """Return (name, proposal) of a candidate, in any phase.

        Raises:
            ElectionNotFoundError: If the election does not exist.
            CandidateNotFoundError: If candidate_id is not enrolled.
        """
        election = await self.locate(key)
        candidate = election.candidate(candidate_id)
        return candidate.name, candidate.proposal

    async def check_votes(self, key: ElectionKey, candidate_id: int) -> int:
        """Return a candidate's vote count once the election is closed.

        Raises:
            ElectionNotFoundError: If the election does not exist.
            TallyNotVisibleError: If the election is not closed.
            CandidateNotFoundError: If candidate_id is not enrolled.
        """
        election = await self.locate(key)
        try:
            return election.tally(candidate_id, self._time.now())
        except ElectionError as e:
            self._log_operation(
                "check_votes", election=str(key), candidate_id=candidate_id
            ).debug("tally_rejected", kind=e.kind.value)
            raise

    async def get_phase(self, key: ElectionKey) -> ElectionPhase:
        """Return the phase of an election at the current time."""
        _, phase = await self.status(key)
        return phase

    async def list_candidates(self, key: ElectionKey) -> list[CandidateSummary]:
        """List enrolled candidates in id order, without vote counts."""
        election = await self.locate(key)
        return [
            CandidateSummary(id=c.id, name=c.name, proposal=c.proposal)
            for c in election.candidates
        ]

    # =========================================================================
    # Helpers
    # =========================================================================

    def _validate_candidate_text(self, name: str, proposal: str) -> None:
        """Apply the configured length limits, if any, to name and proposal.

        Raises:
            InvalidCandidateError: If a limit is exceeded.
        """
        name_limit = self._config.name_limit
        if name_limit is not None and len(name) > name_limit:
            raise InvalidCandidateError("name", f"exceeds {name_limit} characters")
        proposal_limit = self._config.proposal_limit
        if proposal_limit is not None and len(proposal) > proposal_limit:
            raise InvalidCandidateError(
                "proposal", f"exceeds {proposal_limit} characters"
            )
