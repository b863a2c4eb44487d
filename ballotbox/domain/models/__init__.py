"""Domain models for ballotbox."""

from ballotbox.domain.models.election import (
    Candidate,
    Election,
    ElectionKey,
    ElectionPhase,
    TimingWindow,
)
from ballotbox.domain.models.identity import Identity

__all__: list[str] = [
    "Candidate",
    "Election",
    "ElectionKey",
    "ElectionPhase",
    "Identity",
    "TimingWindow",
]
