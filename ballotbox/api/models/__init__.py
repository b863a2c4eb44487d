"""API request/response models for ballotbox."""
