"""Election domain model.

This module defines the single-election state machine: the candidate slate,
the voter record, and the voting window.

State Machine:
    NOT_STARTED --(start, owner, duration > 0)--> OPEN
    OPEN --(now >= expiration, observed lazily)--> CLOSED
    CLOSED is terminal.

Phase is never stored. It is computed from (expiration, now) each time an
operation reads the election, so no timer is needed and two reads at
different times may legitimately observe different phases.

Election is frozen. Each operation validates every precondition against the
current snapshot and returns a NEW snapshot; a failed check raises before
anything is built, so the stored election is never partially modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ballotbox.domain.errors.election import (
    CandidateNotFoundError,
    DuplicateVoteError,
    ElectionAlreadyStartedError,
    EnrollmentClosedError,
    InvalidDurationError,
    NotElectionOwnerError,
    TallyNotVisibleError,
    VotingNotOpenError,
)
from ballotbox.domain.models.identity import Identity

# Expiration value meaning "never started"
UNSET_EXPIRATION: int = 0

# First id handed out to an enrolled candidate
FIRST_CANDIDATE_ID: int = 1


class ElectionPhase(Enum):
    """Derived phase of an election.

    States:
        NOT_STARTED: Window never opened; candidates may be enrolled
        OPEN: now < expiration; votes accepted
        CLOSED: now >= expiration; tallies visible (terminal)
    """

    NOT_STARTED = "NOT_STARTED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"

    def is_terminal(self) -> bool:
        """Check if no further writes are accepted in this phase."""
        return self is ElectionPhase.CLOSED


@dataclass(frozen=True, eq=True)
class Candidate:
    """An enrolled contestant.

    Attributes:
        id: Sequential id assigned at enrollment (starting at 1).
        name: Display name supplied at enrollment.
        proposal: Proposal text supplied at enrollment.
        vote_count: Accepted votes so far (only ever increases by 1).
    """

    id: int
    name: str
    proposal: str
    vote_count: int = 0

    def __post_init__(self) -> None:
        """Validate candidate fields."""
        if self.id < FIRST_CANDIDATE_ID:
            raise ValueError(f"Candidate id must be >= {FIRST_CANDIDATE_ID}, got {self.id}")
        if self.vote_count < 0:
            raise ValueError(f"vote_count must be non-negative, got {self.vote_count}")

    def with_vote(self) -> Candidate:
        """Return a copy with exactly one more vote."""
        return replace(self, vote_count=self.vote_count + 1)


@dataclass(frozen=True, eq=True)
class TimingWindow:
    """Voting window of an election.

    Attributes:
        expiration: Clock reading at which voting ends (0 = never started).
    """

    expiration: int = UNSET_EXPIRATION

    @property
    def is_started(self) -> bool:
        """Whether the window was ever opened."""
        return self.expiration != UNSET_EXPIRATION

    def phase(self, now: int) -> ElectionPhase:
        """Compute the phase for a clock reading.

        Pure function of (expiration, now); nothing is cached.

        Args:
            now: Current clock reading.

        Returns:
            The phase at that instant.
        """
        if not self.is_started:
            return ElectionPhase.NOT_STARTED
        if now < self.expiration:
            return ElectionPhase.OPEN
        return ElectionPhase.CLOSED


@dataclass(frozen=True, eq=True, order=True)
class ElectionKey:
    """External key (and handle) of an election: owner identity + name.

    Attributes:
        owner: Identity that created the election.
        name: Election name, unique per owner.
    """

    owner: Identity
    name: str

    def __post_init__(self) -> None:
        """Validate the key."""
        if not self.name:
            raise ValueError("Election name must be non-empty")

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, eq=True)
class Election:
    """Snapshot of one election.

    Invariants:
    - next_id == 1 + highest id ever assigned; ids are never reused
    - an identity appears in voters at most once
    - sum of vote_count over candidates == len(voters)
    - expiration never changes once set

    Attributes:
        key: The (owner, name) key of this election.
        candidates: Enrolled candidates in id order.
        next_id: Id the next enrolled candidate receives.
        voters: Identities that have voted.
        timing: The voting window.
    """

    key: ElectionKey
    candidates: tuple[Candidate, ...] = field(default=())
    next_id: int = FIRST_CANDIDATE_ID
    voters: frozenset[Identity] = field(default_factory=frozenset)
    timing: TimingWindow = field(default_factory=TimingWindow)

    @classmethod
    def create(cls, owner: Identity, name: str) -> Election:
        """Create a fresh, not-started election owned by `owner`."""
        return cls(key=ElectionKey(owner=owner, name=name))

    # =========================================================================
    # Read helpers
    # =========================================================================

    @property
    def owner(self) -> Identity:
        """Identity authorized to enroll candidates and start the election."""
        return self.key.owner

    @property
    def expiration(self) -> int:
        """Expiration of the voting window (0 = never started)."""
        return self.timing.expiration

    def phase_at(self, now: int) -> ElectionPhase:
        """Phase of this election at clock reading `now`."""
        return self.timing.phase(now)

    def is_owner(self, identity: Identity) -> bool:
        return identity == self.key.owner

    def has_voted(self, identity: Identity) -> bool:
        return identity in self.voters

    def find_candidate(self, candidate_id: int) -> Candidate | None:
        """Look up a candidate by id, or None if not enrolled."""
        for candidate in self.candidates:
            if candidate.id == candidate_id:
                return candidate
        return None

    def candidate(self, candidate_id: int) -> Candidate:
        """Look up a candidate by id.

        Raises:
            CandidateNotFoundError: If the id is not enrolled.
        """
        found = self.find_candidate(candidate_id)
        if found is None:
            raise CandidateNotFoundError(self.key, candidate_id)
        return found

    # =========================================================================
    # Operations (validate, then return a new snapshot)
    # =========================================================================

    def enroll(
        self,
        caller: Identity,
        name: str,
        proposal: str,
        now: int,
    ) -> tuple[Election, Candidate]:
        """Enroll a candidate.

        Args:
            caller: Identity requesting the enrollment.
            name: Candidate name.
            proposal: Candidate proposal.
            now: Current clock reading.

        Returns:
            Tuple of (new election snapshot, the enrolled candidate).

        Raises:
            NotElectionOwnerError: If caller is not the owner.
            EnrollmentClosedError: If the phase is not NOT_STARTED.
        """
        phase = self.phase_at(now)
        if not self.is_owner(caller):
            raise NotElectionOwnerError(self.key, caller, "add_candidate")
        if phase is not ElectionPhase.NOT_STARTED:
            raise EnrollmentClosedError(self.key, phase)

        candidate = Candidate(id=self.next_id, name=name, proposal=proposal)
        updated = replace(
            self,
            candidates=self.candidates + (candidate,),
            next_id=self.next_id + 1,
        )
        return updated, candidate

    def start(self, caller: Identity, duration: int, now: int) -> Election:
        """Open the voting window for `duration` clock units.

        The already-started check precedes any phase reasoning, so a closed
        election can never be restarted.

        Raises:
            NotElectionOwnerError: If caller is not the owner.
            ElectionAlreadyStartedError: If the window was ever opened.
            InvalidDurationError: If duration <= 0.
        """
        if not self.is_owner(caller):
            raise NotElectionOwnerError(self.key, caller, "start_election")
        if self.timing.is_started:
            raise ElectionAlreadyStartedError(self.key, self.timing.expiration)
        if duration <= 0:
            raise InvalidDurationError(duration)

        return replace(self, timing=TimingWindow(expiration=now + duration))

    def record_vote(self, voter: Identity, candidate_id: int, now: int) -> Election:
        """Record one vote for a candidate.

        Check order is duplicate voter, then unknown candidate, then phase.
        Callers rely on this order to know which error they observe when
        several conditions fail at once.

        Raises:
            DuplicateVoteError: If voter already voted.
            CandidateNotFoundError: If candidate_id is not enrolled.
            VotingNotOpenError: If the phase is not OPEN.
        """
        phase = self.phase_at(now)
        if self.has_voted(voter):
            raise DuplicateVoteError(self.key, voter)
        target = self.candidate(candidate_id)
        if phase is not ElectionPhase.OPEN:
            raise VotingNotOpenError(self.key, phase)

        candidates = tuple(
            c.with_vote() if c.id == target.id else c for c in self.candidates
        )
        return replace(self, candidates=candidates, voters=self.voters | {voter})

    def tally(self, candidate_id: int, now: int) -> int:
        """Vote count of a candidate, visible only once CLOSED.

        Raises:
            TallyNotVisibleError: If the phase is not CLOSED.
            CandidateNotFoundError: If candidate_id is not enrolled.
        """
        phase = self.phase_at(now)
        if phase is not ElectionPhase.CLOSED:
            raise TallyNotVisibleError(self.key, phase)
        return self.candidate(candidate_id).vote_count

    # =========================================================================
    # Persisted layout
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return {
            "owner": self.key.owner.value,
            "name": self.key.name,
            "candidates": [
                {
                    "id": c.id,
                    "name": c.name,
                    "proposal": c.proposal,
                    "vote_count": c.vote_count,
                }
                for c in self.candidates
            ],
            "next_id": self.next_id,
            "voters": sorted(v.value for v in self.voters),
            "expiration": self.timing.expiration,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Election:
        """Rebuild an election from its persisted record.

        Raises:
            ValueError: If the record violates an election invariant.
            KeyError: If a required field is missing.
        """
        candidates = tuple(
            Candidate(
                id=int(c["id"]),
                name=c["name"],
                proposal=c["proposal"],
                vote_count=int(c["vote_count"]),
            )
            for c in sorted(data["candidates"], key=lambda c: int(c["id"]))
        )
        voters = frozenset(Identity(v) for v in data["voters"])
        election = cls(
            key=ElectionKey(owner=Identity(data["owner"]), name=data["name"]),
            candidates=candidates,
            next_id=int(data["next_id"]),
            voters=voters,
            timing=TimingWindow(expiration=int(data["expiration"])),
        )
        election._check_invariants()
        return election

    def _check_invariants(self) -> None:
        ids = [c.id for c in self.candidates]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Election {self.key}: duplicate candidate ids")
        if ids and max(ids) >= self.next_id:
            raise ValueError(
                f"Election {self.key}: next_id {self.next_id} must exceed "
                f"every assigned id"
            )
        total = sum(c.vote_count for c in self.candidates)
        if total != len(self.voters):
            raise ValueError(
                f"Election {self.key}: {total} votes recorded for "
                f"{len(self.voters)} voters"
            )
        if self.timing.expiration < 0:
            raise ValueError(f"Election {self.key}: negative expiration")
