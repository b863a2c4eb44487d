"""Caller identity value object.

An Identity is an opaque, pre-authenticated token. The election core only
compares identities for equality and hashes them for voter-set membership;
it never inspects their contents.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=True, order=True)
class Identity:
    """Opaque comparable caller token.

    Attributes:
        value: The token as presented by the authentication layer.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate the token."""
        if not self.value:
            raise ValueError("Identity token must be non-empty")

    def __str__(self) -> str:
        return self.value
