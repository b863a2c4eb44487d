"""Election domain errors.

Every failure of an election operation maps onto exactly one ErrorKind.
The intermediate classes (PermissionDeniedError, InvalidStateError, ...)
let callers handle a whole kind at once; the concrete subclasses record
which precondition failed.

All errors are terminal for the operation that raised them: the election
is left exactly as it was, and nothing is retried internally.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ballotbox.domain.exceptions import BallotBoxError

if TYPE_CHECKING:
    from ballotbox.domain.models.election import ElectionKey, ElectionPhase
    from ballotbox.domain.models.identity import Identity


class ErrorKind(Enum):
    """Error taxonomy surfaced to callers.

    Kinds:
        PERMISSION_DENIED: Caller is not the owner, or tally requested before close
        INVALID_STATE: Operation attempted in the wrong phase
        ALREADY_EXISTS: Duplicate creation, duplicate start, duplicate vote
        NOT_FOUND: Unknown election or unknown candidate
        INVALID_ARGUMENT: Rejected input value (e.g. non-positive duration)
    """

    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_STATE = "INVALID_STATE"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class ElectionError(BallotBoxError):
    """Base error for election operations.

    Attributes:
        kind: The ErrorKind reported to the caller.
    """

    kind: ErrorKind


class PermissionDeniedError(ElectionError):
    """Caller is not allowed to perform the operation."""

    kind = ErrorKind.PERMISSION_DENIED


class InvalidStateError(ElectionError):
    """Operation is not permitted in the current phase."""

    kind = ErrorKind.INVALID_STATE


class AlreadyExistsError(ElectionError):
    """Operation would repeat a one-time act."""

    kind = ErrorKind.ALREADY_EXISTS


class NotFoundError(ElectionError):
    """Referenced election or candidate does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(ElectionError):
    """An argument value is rejected."""

    kind = ErrorKind.INVALID_ARGUMENT


# =============================================================================
# Concrete errors
# =============================================================================


class NotElectionOwnerError(PermissionDeniedError):
    """Raised when a non-owner attempts an owner-only operation.

    Attributes:
        key: The election being modified.
        caller: The identity that attempted the operation.
        operation: Name of the rejected operation.
    """

    def __init__(self, key: ElectionKey, caller: Identity, operation: str) -> None:
        self.key = key
        self.caller = caller
        self.operation = operation
        super().__init__(
            f"Identity {caller} is not the owner of election {key}; "
            f"{operation} requires the owner"
        )


class TallyNotVisibleError(PermissionDeniedError):
    """Raised when vote counts are requested before the election closed.

    Attributes:
        key: The election queried.
        phase: The phase the election was in at query time.
    """

    def __init__(self, key: ElectionKey, phase: ElectionPhase) -> None:
        self.key = key
        self.phase = phase
        super().__init__(
            f"Tallies of election {key} are hidden until it closes "
            f"(current phase: {phase.value})"
        )


class EnrollmentClosedError(InvalidStateError):
    """Raised when a candidate is added after the election started.

    Attributes:
        key: The election being modified.
        phase: The phase the election was in.
    """

    def __init__(self, key: ElectionKey, phase: ElectionPhase) -> None:
        self.key = key
        self.phase = phase
        super().__init__(
            f"Candidates can only be added before election {key} starts "
            f"(current phase: {phase.value})"
        )


class VotingNotOpenError(InvalidStateError):
    """Raised when a vote is cast outside the voting window.

    Attributes:
        key: The election voted in.
        phase: The phase the election was in.
    """

    def __init__(self, key: ElectionKey, phase: ElectionPhase) -> None:
        self.key = key
        self.phase = phase
        super().__init__(
            f"Election {key} is not accepting votes (current phase: {phase.value})"
        )


class ElectionAlreadyExistsError(AlreadyExistsError):
    """Raised when an election is created twice under the same key."""

    def __init__(self, key: ElectionKey) -> None:
        self.key = key
        super().__init__(f"Election already exists: {key}")


class ElectionAlreadyStartedError(AlreadyExistsError):
    """Raised when start is requested for an election that was ever started.

    Attributes:
        key: The election.
        expiration: The expiration fixed by the original start.
    """

    def __init__(self, key: ElectionKey, expiration: int) -> None:
        self.key = key
        self.expiration = expiration
        super().__init__(
            f"Election {key} was already started (expiration={expiration}); "
            "the voting window cannot be restarted or extended"
        )


class DuplicateVoteError(AlreadyExistsError):
    """Raised when an identity votes a second time.

    Attributes:
        key: The election.
        voter: The identity that already voted.
    """

    def __init__(self, key: ElectionKey, voter: Identity) -> None:
        self.key = key
        self.voter = voter
        super().__init__(f"Identity {voter} has already voted in election {key}")


class ElectionNotFoundError(NotFoundError):
    """Raised when no election exists for a key."""

    def __init__(self, key: ElectionKey) -> None:
        self.key = key
        super().__init__(f"Election not found: {key}")


class CandidateNotFoundError(NotFoundError):
    """Raised when a candidate id is not enrolled in the election."""

    def __init__(self, key: ElectionKey, candidate_id: int) -> None:
        self.key = key
        self.candidate_id = candidate_id
        super().__init__(f"Candidate {candidate_id} not found in election {key}")


class InvalidDurationError(InvalidArgumentError):
    """Raised when the voting window duration is rejected.

    Attributes:
        duration: The requested duration.
        max_duration: Configured upper bound, if any.
    """

    def __init__(self, duration: int, max_duration: int | None = None) -> None:
        self.duration = duration
        self.max_duration = max_duration
        if duration <= 0:
            message = f"Duration must be positive, got {duration}"
        else:
            message = f"Duration {duration} exceeds maximum of {max_duration}"
        super().__init__(message)


class InvalidCandidateError(InvalidArgumentError):
    """Raised when candidate name or proposal text is rejected.

    Attributes:
        field: Name of the offending field.
        reason: Why the value was rejected.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid candidate {field}: {reason}")
