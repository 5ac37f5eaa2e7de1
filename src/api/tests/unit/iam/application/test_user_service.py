"""Unit tests for UserService."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from sqlalchemy.exc import IntegrityError, OperationalError

from iam.domain.aggregates import User
from iam.ports.repositories import IUserRepository
from infrastructure.database.exceptions import StoreUnavailableError
from shared_kernel.auth import SSOClaims


@pytest.fixture
def mock_user_repository():
    """Create mock user repository."""
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_probe():
    """Create mock user service probe."""
    from iam.application.observability import UserServiceProbe

    return create_autospec(UserServiceProbe, instance=True)


@pytest.fixture
def user_service(mock_user_repository, mock_session, mock_probe):
    """Create UserService with mock dependencies."""
    from iam.application.services.user_service import UserService

    return UserService(
        user_repository=mock_user_repository,
        session=mock_session,
        probe=mock_probe,
    )


@pytest.fixture
def claims() -> SSOClaims:
    return SSOClaims(external_id=42, username="alice", email="a@x.com")


class TestUserServiceInit:
    """Tests for UserService initialization."""

    def test_uses_default_probe_when_not_provided(
        self, mock_user_repository, mock_session
    ):
        """Service should create default probe when not provided."""
        from iam.application.services.user_service import UserService

        service = UserService(
            user_repository=mock_user_repository,
            session=mock_session,
        )
        assert service._probe is not None


class TestEnsureUser:
    """Tests for ensure_user method."""

    @pytest.mark.asyncio
    async def test_upserts_claims_and_returns_stored_user(
        self, user_service, mock_user_repository, mock_probe, claims
    ):
        stored = User(id=1, external_id=42, username="alice", email="a@x.com")
        mock_user_repository.upsert = AsyncMock(return_value=stored)

        result = await user_service.ensure_user(claims)

        assert result is stored
        mock_user_repository.upsert.assert_awaited_once_with(
            external_id=42, username="alice", email="a@x.com"
        )
        mock_probe.user_ensured.assert_called_once_with(
            user_id=1, external_id=42, username="alice"
        )

    @pytest.mark.asyncio
    async def test_runs_inside_transaction(
        self, user_service, mock_user_repository, mock_session, claims
    ):
        mock_user_repository.upsert = AsyncMock(
            return_value=User(id=1, external_id=42, username="alice")
        )

        await user_service.ensure_user(claims)

        mock_session.begin.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            OperationalError("INSERT", {}, Exception("connection refused")),
            IntegrityError("INSERT", {}, Exception("constraint")),
            ConnectionRefusedError("refused"),
        ],
    )
    async def test_store_errors_become_store_unavailable(
        self, user_service, mock_user_repository, mock_probe, claims, error
    ):
        mock_user_repository.upsert = AsyncMock(side_effect=error)

        with pytest.raises(StoreUnavailableError):
            await user_service.ensure_user(claims)

        mock_probe.user_provision_failed.assert_called_once_with(
            external_id=42,
            username="alice",
            error=type(error).__name__,
        )
        mock_probe.user_ensured.assert_not_called()
