"""PostgreSQL implementation of IUserRepository.

Users are provisioned from SSO; writes go through a single
``INSERT ... ON CONFLICT`` statement so the database resolves concurrent
first logins for the same forum account.
"""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    The repository does not manage transactions; callers wrap calls in
    ``async with session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def upsert(
        self, external_id: int, username: str, email: str | None
    ) -> User:
        """Insert or update a user keyed by external id.

        Args:
            external_id: Identity provider user id
            username: Current username from the provider
            email: Current email from the provider

        Returns:
            The canonical User as stored
        """
        stmt = insert(UserModel).values(
            external_id=external_id,
            username=username,
            email=email,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserModel.external_id],
            set_={
                "username": stmt.excluded.username,
                "email": stmt.excluded.email,
                "updated_at": func.now(),
            },
        ).returning(
            UserModel.id,
            UserModel.external_id,
            UserModel.username,
            UserModel.email,
        )

        result = await self._session.execute(stmt)
        row = result.one()

        self._probe.user_upserted(user_id=row.id, external_id=row.external_id)
        return User(
            id=row.id,
            external_id=row.external_id,
            username=row.username,
            email=row.email,
        )
