"""Bootstrap wiring for ballotbox."""
