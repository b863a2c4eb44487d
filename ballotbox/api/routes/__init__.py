"""API routes for ballotbox."""

from ballotbox.api.routes.election import router as election_router

__all__: list[str] = ["election_router"]
