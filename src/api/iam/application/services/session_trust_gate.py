"""Session trust gate.

The single chokepoint every protected request passes through. It turns
raw SSO header material into an authenticated user, or refuses.
"""

from __future__ import annotations

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services.user_service import UserService
from iam.application.value_objects import AuthenticatedUser, SSOCredentials
from iam.domain.value_objects import TrustTier
from shared_kernel.auth import (
    CredentialsMissingError,
    PayloadMalformedError,
    SignatureInvalidError,
    SignatureVerifier,
    SSOClaims,
    decode_payload,
)

DEV_BYPASS_ENVIRONMENTS = frozenset({"development", "test"})
DEV_BYPASS_USERNAME = "dev_user"


class SessionTrustGate:
    """Decides whether a request carries a trustworthy identity.

    Evaluation order:

    1. Development bypass header, honored only in development and test
       environments. No store write.
    2. Payload and signature: verify, then decode.
    3. Payload alone: the unsigned tier, if the deployment allows it.
    4. Nothing usable: credentials missing.

    A successfully decoded payload is upserted through the user service.
    Rejections never reach the store.
    """

    def __init__(
        self,
        verifier: SignatureVerifier,
        user_service: UserService,
        environment: str,
        allow_unsigned: bool = True,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize the gate.

        Args:
            verifier: Signature verifier holding the shared secret
            user_service: Service used to upsert authenticated users
            environment: Deployment environment name
            allow_unsigned: Whether payloads without a signature are trusted
            probe: Optional domain probe for observability
        """
        self._verifier = verifier
        self._user_service = user_service
        self._environment = environment
        self._allow_unsigned = allow_unsigned
        self._probe = probe or DefaultAuthenticationProbe()

    @property
    def dev_bypass_enabled(self) -> bool:
        """Whether the development bypass header is honored."""
        return self._environment in DEV_BYPASS_ENVIRONMENTS

    async def authenticate(self, credentials: SSOCredentials) -> AuthenticatedUser:
        """Authenticate a request from its SSO credentials.

        Args:
            credentials: Header material from the request

        Returns:
            The authenticated user

        Raises:
            CredentialsMissingError: If no usable credential is present
            SignatureInvalidError: If the signature does not verify, or an
                unsigned payload arrives while the unsigned tier is disabled
            PayloadMalformedError: If the payload or bypass id cannot be decoded
            StoreUnavailableError: If the user cannot be persisted
        """
        if credentials.dev_user_id:
            if self.dev_bypass_enabled:
                return self._bypass(credentials.dev_user_id)
            self._probe.dev_bypass_ignored(environment=self._environment)

        if credentials.payload and credentials.signature:
            if not self._verifier.verify(credentials.payload, credentials.signature):
                self._probe.authentication_failed(reason="invalid_signature")
                raise SignatureInvalidError("SSO signature does not match payload")
            claims = self._decode(credentials.payload)
            tier = TrustTier.SIGNED
        elif credentials.payload:
            if not self._allow_unsigned:
                self._probe.authentication_failed(reason="unsigned_rejected")
                raise SignatureInvalidError("SSO payload is not signed")
            claims = self._decode(credentials.payload)
            self._probe.unsigned_payload_accepted(external_id=claims.external_id)
            tier = TrustTier.UNSIGNED
        else:
            self._probe.authentication_failed(reason="missing_credentials")
            raise CredentialsMissingError("No SSO credentials supplied")

        user = await self._user_service.ensure_user(claims)
        self._probe.user_authenticated(
            user_id=user.id, username=user.username, trust_tier=tier.value
        )
        return AuthenticatedUser(
            id=user.id,
            external_id=user.external_id,
            username=user.username,
            email=user.email,
            trust_tier=tier,
        )

    def _bypass(self, raw_id: str) -> AuthenticatedUser:
        digits = raw_id.strip()
        if not (digits.isascii() and digits.isdigit()):
            self._probe.authentication_failed(reason="malformed_dev_user_id")
            raise PayloadMalformedError("Development user id is not numeric")

        dev_user_id = int(digits)
        self._probe.dev_bypass_used(
            dev_user_id=dev_user_id, environment=self._environment
        )
        return AuthenticatedUser(
            id=dev_user_id,
            external_id=dev_user_id,
            username=DEV_BYPASS_USERNAME,
            email=None,
            trust_tier=TrustTier.BYPASS,
        )

    def _decode(self, payload: str) -> SSOClaims:
        try:
            return decode_payload(payload)
        except PayloadMalformedError:
            self._probe.authentication_failed(reason="malformed_payload")
            raise
