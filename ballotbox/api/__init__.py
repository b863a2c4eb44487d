"""HTTP API for ballotbox (FastAPI)."""
