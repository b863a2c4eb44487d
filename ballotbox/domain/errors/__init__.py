"""Domain errors for ballotbox.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from BallotBoxError.
"""

from ballotbox.domain.errors.election import (
    AlreadyExistsError,
    CandidateNotFoundError,
    DuplicateVoteError,
    ElectionAlreadyExistsError,
    ElectionAlreadyStartedError,
    ElectionError,
    ElectionNotFoundError,
    EnrollmentClosedError,
    ErrorKind,
    InvalidArgumentError,
    InvalidCandidateError,
    InvalidDurationError,
    InvalidStateError,
    NotElectionOwnerError,
    NotFoundError,
    PermissionDeniedError,
    TallyNotVisibleError,
    VotingNotOpenError,
)

__all__: list[str] = [
    "AlreadyExistsError",
    "CandidateNotFoundError",
    "DuplicateVoteError",
    "ElectionAlreadyExistsError",
    "ElectionAlreadyStartedError",
    "ElectionError",
    "ElectionNotFoundError",
    "EnrollmentClosedError",
    "ErrorKind",
    "InvalidArgumentError",
    "InvalidCandidateError",
    "InvalidDurationError",
    "InvalidStateError",
    "NotElectionOwnerError",
    "NotFoundError",
    "PermissionDeniedError",
    "TallyNotVisibleError",
    "VotingNotOpenError",
]
