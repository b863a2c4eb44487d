"""Election API routes.

FastAPI router exposing the election Operations Layer. Elections are
addressed by their key: /v1/elections/{owner}/{name}.

Error Mapping (RFC 7807 bodies, `kind` carries the ErrorKind):
- PERMISSION_DENIED -> 403
- INVALID_STATE -> 409
- ALREADY_EXISTS -> 409
- NOT_FOUND -> 404
- INVALID_ARGUMENT -> 400 (also owner or name that is not one path segment)

Developer Golden Rules:
1. IDENTITY FROM HEADER - Writes use the pre-authenticated caller identity
2. NO LOGIC HERE - Lifecycle rules live in the service/domain; routes only
   refuse keys that could not be addressed again
3. READS ARE PUBLIC - Queries need no caller identity
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from ballotbox.api.dependencies.election import (
    get_caller_identity,
    get_election_service,
)
from ballotbox.api.models.election import (
    AddCandidateRequest,
    AddCandidateResponse,
    CandidateListResponse,
    CandidateResponse,
    CastVoteRequest,
    CreateElectionRequest,
    ElectionErrorResponse,
    ElectionPhaseEnum,
    ElectionResponse,
    StartElectionRequest,
    StartElectionResponse,
    VoteCountResponse,
)
from ballotbox.application.services.election_service import ElectionService
from ballotbox.domain.errors.election import ElectionError, ErrorKind
from ballotbox.domain.models.election import ElectionKey
from ballotbox.domain.models.identity import Identity

router = APIRouter(prefix="/v1/elections", tags=["elections"])

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.INVALID_STATE: 409,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
}

_TITLE_BY_KIND: dict[ErrorKind, str] = {
    ErrorKind.PERMISSION_DENIED: "Permission Denied",
    ErrorKind.INVALID_STATE: "Invalid State",
    ErrorKind.ALREADY_EXISTS: "Already Exists",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.INVALID_ARGUMENT: "Invalid Argument",
}

# Path segments that URL normalization removes
_DOT_SEGMENTS = frozenset({".", ".."})

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    status: {"model": ElectionErrorResponse} for status in (400, 401, 403, 404, 409)
}


def _http_error(error: ElectionError, request: Request) -> HTTPException:
    """Translate a domain error into an HTTPException."""
    return _problem(error.kind, str(error), request)


def _problem(kind: ErrorKind, detail: str, request: Request) -> HTTPException:
    status = _STATUS_BY_KIND[kind]
    return HTTPException(
        status_code=status,
        detail={
            "type": f"urn:ballotbox:error:{kind.value.lower().replace('_', '-')}",
            "title": _TITLE_BY_KIND[kind],
            "status": status,
            "detail": detail,
            "kind": kind.value,
            "instance": str(request.url),
        },
    )


def _check_addressable(caller: Identity, name: str, request: Request) -> None:
    """Reject keys that cannot be routed back as /{owner}/{name}.

    Raises:
        HTTPException: 400 if the owner or the name is not a single path segment.
    """
    for label, value in (("Owner identity", caller.value), ("Election name", name)):
        if "/" in value or value in _DOT_SEGMENTS:
            raise _problem(
                ErrorKind.INVALID_ARGUMENT,
                f"{label} {value!r} is not a single path segment",
                request,
            )


def _key(owner: str, name: str) -> ElectionKey:
    return ElectionKey(owner=Identity(owner), name=name)


async def _election_response(
    service: ElectionService, key: ElectionKey
) -> ElectionResponse:
    election, phase = await service.status(key)
    return ElectionResponse(
        owner=str(election.owner),
        name=election.key.name,
        phase=ElectionPhaseEnum(phase.value),
        expiration=election.expiration,
        candidate_count=len(election.candidates),
    )


# =============================================================================
# Election lifecycle
# =============================================================================


@router.post(
    "",
    response_model=ElectionResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Create an election owned by the caller",
)
async def create_election(
    request_data: CreateElectionRequest,
    request: Request,
    caller: Identity = Depends(get_caller_identity),
    service: ElectionService = Depends(get_election_service),
) -> ElectionResponse:
    _check_addressable(caller, request_data.name, request)
    try:
        key = await service.create_election(owner=caller, name=request_data.name)
        return await _election_response(service, key)
    except ElectionError as e:
        raise _http_error(e, request) from None


@router.get(
    "/{owner}/{name}",
    response_model=ElectionResponse,
    responses=_ERROR_RESPONSES,
    summary="Get election phase and window",
)
async def get_election(
    owner: str,
    name: str,
    request: Request,
    service: ElectionService = Depends(get_election_service),
) -> ElectionResponse:
    try:
        return await _election_response(service, _key(owner, name))
    except ElectionError as e:
        raise _http_error(e, request) from None


@router.post(
    "/{owner}/{name}/start",
    response_model=StartElectionResponse,
    responses=_ERROR_RESPONSES,
    summary="Open the voting window (owner only, once)",
)
async def start_election(
    owner: str,
    name: str,
    request_data: StartElectionRequest,
    request: Request,
    caller: Identity = Depends(get_caller_identity),
    service: ElectionService = Depends(get_election_service),
) -> StartElectionResponse:
    try:
        expiration = await service.start_election(
            caller, _key(owner, name), request_data.duration
        )
    except ElectionError as e:
        raise _http_error(e, request) from None
    return StartElectionResponse(expiration=expiration)


# =============================================================================
# Candidates
# =============================================================================


@router.post(
    "/{owner}/{name}/candidates",
    response_model=AddCandidateResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Enroll a candidate (owner only, before start)",
)
async def add_candidate(
    owner: str,
    name: str,
    request_data: AddCandidateRequest,
    request: Request,
    caller: Identity = Depends(get_caller_identity),
    service: ElectionService = Depends(get_election_service),
) -> AddCandidateResponse:
    try:
        candidate_id = await service.add_candidate(
            caller, _key(owner, name), request_data.name, request_data.proposal
        )
    except ElectionError as e:
        raise _http_error(e, request) from None
    return AddCandidateResponse(candidate_id=candidate_id)


@router.get(
    "/{owner}/{name}/candidates",
    response_model=CandidateListResponse,
    responses=_ERROR_RESPONSES,
    summary="List enrolled candidates",
)
async def list_candidates(
    owner: str,
    name: str,
    request: Request,
    service: ElectionService = Depends(get_election_service),
) -> CandidateListResponse:
    try:
        summaries = await service.list_candidates(_key(owner, name))
    except ElectionError as e:
        raise _http_error(e, request) from None
    return CandidateListResponse(
        candidates=[
            CandidateResponse(candidate_id=s.id, name=s.name, proposal=s.proposal)
            for s in summaries
        ]
    )


@router.get(
    "/{owner}/{name}/candidates/{candidate_id}",
    response_model=CandidateResponse,
    responses=_ERROR_RESPONSES,
    summary="Look up a candidate (any phase)",
)
async def check_candidates(
    owner: str,
    name: str,
    candidate_id: int,
    request: Request,
    service: ElectionService = Depends(get_election_service),
) -> CandidateResponse:
    try:
        candidate_name, proposal = await service.check_candidates(
            _key(owner, name), candidate_id
        )
    except ElectionError as e:
        raise _http_error(e, request) from None
    return CandidateResponse(
        candidate_id=candidate_id, name=candidate_name, proposal=proposal
    )


# =============================================================================
# Voting and tallies
# =============================================================================


@router.post(
    "/{owner}/{name}/votes",
    status_code=204,
    response_class=Response,
    responses=_ERROR_RESPONSES,
    summary="Cast the caller's vote",
)
async def cast_vote(
    owner: str,
    name: str,
    request_data: CastVoteRequest,
    request: Request,
    caller: Identity = Depends(get_caller_identity),
    service: ElectionService = Depends(get_election_service),
) -> Response:
    try:
        await service.cast_vote(caller, _key(owner, name), request_data.candidate_id)
    except ElectionError as e:
        raise _http_error(e, request) from None
    return Response(status_code=204)


@router.get(
    "/{owner}/{name}/candidates/{candidate_id}/votes",
    response_model=VoteCountResponse,
    responses=_ERROR_RESPONSES,
    summary="Get a candidate's tally (only once closed)",
)
async def check_votes(
    owner: str,
    name: str,
    candidate_id: int,
    request: Request,
    service: ElectionService = Depends(get_election_service),
) -> VoteCountResponse:
    try:
        vote_count = await service.check_votes(_key(owner, name), candidate_id)
    except ElectionError as e:
        raise _http_error(e, request) from None
    return VoteCountResponse(candidate_id=candidate_id, vote_count=vote_count)
