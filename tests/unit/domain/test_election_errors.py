"""Unit tests for election domain errors.

Tests cover:
- Every concrete error reports the right ErrorKind
- All errors share the BallotBoxError root
- Messages carry the election key
"""

from __future__ import annotations

import pytest

from ballotbox.domain.errors import (
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
from ballotbox.domain.exceptions import BallotBoxError
from ballotbox.domain.models.election import ElectionKey, ElectionPhase
from ballotbox.domain.models.identity import Identity

KEY = ElectionKey(owner=Identity("owner"), name="board")
VOTER = Identity("voter")


@pytest.mark.parametrize(
    "error, base, kind",
    [
        (NotElectionOwnerError(KEY, VOTER, "add_candidate"), PermissionDeniedError, ErrorKind.PERMISSION_DENIED),
        (TallyNotVisibleError(KEY, ElectionPhase.OPEN), PermissionDeniedError, ErrorKind.PERMISSION_DENIED),
        (EnrollmentClosedError(KEY, ElectionPhase.OPEN), InvalidStateError, ErrorKind.INVALID_STATE),
        (VotingNotOpenError(KEY, ElectionPhase.CLOSED), InvalidStateError, ErrorKind.INVALID_STATE),
        (ElectionAlreadyExistsError(KEY), AlreadyExistsError, ErrorKind.ALREADY_EXISTS),
        (ElectionAlreadyStartedError(KEY, 100), AlreadyExistsError, ErrorKind.ALREADY_EXISTS),
        (DuplicateVoteError(KEY, VOTER), AlreadyExistsError, ErrorKind.ALREADY_EXISTS),
        (ElectionNotFoundError(KEY), NotFoundError, ErrorKind.NOT_FOUND),
        (CandidateNotFoundError(KEY, 9), NotFoundError, ErrorKind.NOT_FOUND),
        (InvalidDurationError(0), InvalidArgumentError, ErrorKind.INVALID_ARGUMENT),
        (InvalidCandidateError("name", "must not be blank"), InvalidArgumentError, ErrorKind.INVALID_ARGUMENT),
    ],
)
def test_error_kind(error: ElectionError, base: type, kind: ErrorKind) -> None:
    assert isinstance(error, base)
    assert isinstance(error, BallotBoxError)
    assert error.kind is kind


def test_messages_name_the_election() -> None:
    assert "owner/board" in str(ElectionNotFoundError(KEY))
    assert "voter" in str(DuplicateVoteError(KEY, VOTER))
    assert "OPEN" in str(TallyNotVisibleError(KEY, ElectionPhase.OPEN))


def test_duration_messages() -> None:
    assert "positive" in str(InvalidDurationError(-5))
    assert "exceeds maximum of 60" in str(InvalidDurationError(120, 60))
