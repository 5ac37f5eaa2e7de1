"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. The application layer depends on these, never on the
SQLAlchemy implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import User


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Users are keyed by the identity provider's ``external_id``; the local
    ``id`` is assigned by the store on first insert.
    """

    async def upsert(
        self, external_id: int, username: str, email: str | None
    ) -> User:
        """Insert a user, or update username and email if the external id exists.

        Must be atomic at the store so that concurrent calls for the same
        external id never produce two rows.

        Args:
            external_id: Identity provider user id (unique key)
            username: Current username from the provider
            email: Current email from the provider

        Returns:
            The canonical User as stored
        """
        ...
