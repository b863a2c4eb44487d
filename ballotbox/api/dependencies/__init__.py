"""FastAPI dependencies for ballotbox."""
