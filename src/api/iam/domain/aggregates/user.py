"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """User aggregate representing a forum member known to the tracker.

    Users are provisioned from Discourse SSO. ``id`` is assigned by the
    store; ``external_id`` is the forum's user id and is unique.
    """

    id: int
    external_id: int
    username: str
    email: str | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
