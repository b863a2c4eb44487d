"""Application layer for ballotbox: ports and services."""
