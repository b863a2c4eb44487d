"""Test helpers for ballotbox."""
