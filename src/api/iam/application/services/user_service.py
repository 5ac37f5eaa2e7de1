"""User application service for IAM bounded context.

Handles user provisioning from SSO with JIT (just-in-time) creation.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import User
from iam.ports.repositories import IUserRepository
from infrastructure.database.exceptions import StoreUnavailableError
from shared_kernel.auth import SSOClaims


class UserService:
    """Application service for user management.

    Handles user provisioning from SSO with JIT (just-in-time) creation.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()
        self._session = session

    async def ensure_user(self, claims: SSOClaims) -> User:
        """Insert or refresh the user described by SSO claims.

        The username and email are overwritten on every call so the local
        record tracks the forum account.

        Args:
            claims: Decoded SSO claims

        Returns:
            The canonical User record

        Raises:
            StoreUnavailableError: If the store cannot complete the upsert
        """
        try:
            async with self._session.begin():
                user = await self._user_repository.upsert(
                    external_id=claims.external_id,
                    username=claims.username,
                    email=claims.email,
                )
        except (SQLAlchemyError, OSError) as e:
            self._probe.user_provision_failed(
                external_id=claims.external_id,
                username=claims.username,
                error=type(e).__name__,
            )
            raise StoreUnavailableError("Failed to persist user") from e

        self._probe.user_ensured(
            user_id=user.id,
            external_id=user.external_id,
            username=user.username,
        )
        return user
