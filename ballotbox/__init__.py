"""
ballotbox - Single Election Lifecycle Core

Governs one election per key: candidate enrollment while the election has
not started, a time-bounded voting window opened exactly once, one vote per
identity, and tallies that stay hidden until the window closes.

Core Rules:
- Phase is derived from (expiration, now), never stored
- Every mutation validates first, then commits a new snapshot
- One writer per election at a time
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
