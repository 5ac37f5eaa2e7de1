from functools import lru_cache

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from infrastructure.settings import get_sso_settings
from shared_kernel.auth import DefaultSignatureVerifierProbe, SignatureVerifier


@lru_cache
def get_signature_verifier() -> SignatureVerifier:
    """Get cached signature verifier.

    Uses lru_cache so the secret is read from settings once per process.

    Returns:
        SignatureVerifier configured from SSO settings.
    """
    settings = get_sso_settings()
    return SignatureVerifier(
        secret=settings.secret,
        probe=DefaultSignatureVerifierProbe(),
    )


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance.

    Returns:
        DefaultAuthenticationProbe instance for observability
    """
    return DefaultAuthenticationProbe()
