from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from iam.application.services import SessionTrustGate, UserService
from iam.application.value_objects import AuthenticatedUser, SSOCredentials
from iam.dependencies.authentication import (
    get_authentication_probe,
    get_signature_verifier,
)
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session
from infrastructure.database.exceptions import StoreUnavailableError
from infrastructure.settings import get_app_settings, get_sso_settings
from shared_kernel.auth import AuthenticationError, SignatureVerifier

SSO_PAYLOAD_HEADER = "X-Discourse-SSO"
SSO_SIGNATURE_HEADER = "X-Discourse-Sig"
DEV_USER_ID_HEADER = "X-Dev-User-Id"

WWW_AUTHENTICATE = "Discourse-SSO"


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(user_repository=user_repo, session=session, probe=probe)


def get_session_trust_gate(
    verifier: Annotated[SignatureVerifier, Depends(get_signature_verifier)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> SessionTrustGate:
    """Get SessionTrustGate configured from application and SSO settings."""
    return SessionTrustGate(
        verifier=verifier,
        user_service=user_service,
        environment=get_app_settings().environment,
        allow_unsigned=get_sso_settings().allow_unsigned_payloads,
        probe=probe,
    )


async def get_current_user(
    gate: Annotated[SessionTrustGate, Depends(get_session_trust_gate)],
    sso_payload: Annotated[str | None, Header(alias=SSO_PAYLOAD_HEADER)] = None,
    sso_signature: Annotated[str | None, Header(alias=SSO_SIGNATURE_HEADER)] = None,
    dev_user_id: Annotated[str | None, Header(alias=DEV_USER_ID_HEADER)] = None,
) -> AuthenticatedUser:
    """Authenticate the request through the session trust gate.

    Every protected route depends on this. The 401 detail is the same for
    every rejection; the specific reason is only logged by the gate.

    Args:
        gate: The session trust gate
        sso_payload: Base64 SSO payload header
        sso_signature: Hex HMAC signature header
        dev_user_id: Development identity header

    Returns:
        AuthenticatedUser for the request

    Raises:
        HTTPException 401: If the credentials are rejected
        HTTPException 500: If the user could not be persisted
    """
    credentials = SSOCredentials(
        payload=sso_payload,
        signature=sso_signature,
        dev_user_id=dev_user_id,
    )
    try:
        return await gate.authenticate(credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing SSO credentials",
            headers={"WWW-Authenticate": WWW_AUTHENTICATE},
        ) from e
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication failed",
        ) from e
