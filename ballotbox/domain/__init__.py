"""Domain layer for ballotbox: models and errors with no infrastructure imports."""
