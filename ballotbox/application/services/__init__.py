"""Application services for ballotbox."""

from ballotbox.application.services.election_service import (
    CandidateSummary,
    ElectionService,
)

__all__: list[str] = ["CandidateSummary", "ElectionService"]
