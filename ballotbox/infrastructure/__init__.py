"""Infrastructure layer for ballotbox: adapters, stubs and observability."""
