"""Election API request/response models.

Pydantic models for the election endpoints.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Domain errors become RFC 7807 bodies carrying `kind`
3. TYPE SAFETY - All fields typed
"""

from enum import Enum

from pydantic import BaseModel, Field


class ElectionPhaseEnum(str, Enum):
    """Election phase as exposed by the API."""

    NOT_STARTED = "NOT_STARTED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class CreateElectionRequest(BaseModel):
    """Request body for creating an election; the caller becomes owner."""

    name: str = Field(..., min_length=1, max_length=256, description="Election name")


class ElectionResponse(BaseModel):
    """Summary of an election at the time of the request."""

    owner: str = Field(..., description="Owner identity")
    name: str = Field(..., description="Election name")
    phase: ElectionPhaseEnum = Field(..., description="Phase derived at request time")
    expiration: int = Field(..., description="Window expiration (0 = not started)")
    candidate_count: int = Field(..., ge=0)


class AddCandidateRequest(BaseModel):
    """Request body for enrolling a candidate."""

    name: str = Field(..., description="Candidate name")
    proposal: str = Field(default="", description="Candidate proposal")


class AddCandidateResponse(BaseModel):
    """Response for an enrolled candidate."""

    candidate_id: int = Field(..., ge=1)


class CandidateResponse(BaseModel):
    """Candidate as returned by check_candidates (no tally)."""

    candidate_id: int = Field(..., ge=1)
    name: str
    proposal: str


class CandidateListResponse(BaseModel):
    """Enrolled candidates in id order."""

    candidates: list[CandidateResponse]


class StartElectionRequest(BaseModel):
    """Request body for opening the voting window."""

    duration: int = Field(..., description="Window length in clock units (must be > 0)")


class StartElectionResponse(BaseModel):
    """Response after the voting window opened."""

    expiration: int


class CastVoteRequest(BaseModel):
    """Request body for casting a vote."""

    candidate_id: int


class VoteCountResponse(BaseModel):
    """Tally of one candidate (only once the election is closed)."""

    candidate_id: int
    vote_count: int = Field(..., ge=0)


class ElectionErrorResponse(BaseModel):
    """RFC 7807 style error body."""

    type: str
    title: str
    status: int
    detail: str
    kind: str
    instance: str | None = None
