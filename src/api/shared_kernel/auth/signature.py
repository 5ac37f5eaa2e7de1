"""HMAC-SHA256 signature verification for SSO payloads."""

from __future__ import annotations

import hashlib
import hmac
from typing import TYPE_CHECKING

from pydantic import SecretStr

if TYPE_CHECKING:
    from shared_kernel.auth.observability import SignatureVerifierProbe


class SignatureVerifier:
    """Verifies that an SSO payload was signed with the shared secret.

    The expected signature is the lowercase hex HMAC-SHA256 of the payload
    exactly as received (still base64-encoded). Comparison is exact: no
    case folding and no prefix matching.

    Without a configured secret every payload is rejected.
    """

    def __init__(self, secret: SecretStr | None, probe: SignatureVerifierProbe):
        """Initialize the verifier.

        Args:
            secret: Shared secret configured on the identity provider. None or
                empty disables verification (everything fails).
            probe: Observability probe for logging events.
        """
        self._secret = secret
        self._probe = probe

    @property
    def has_secret(self) -> bool:
        """Whether a usable secret is configured."""
        return self._secret is not None and self._secret.get_secret_value() != ""

    def sign(self, payload: str) -> str:
        """Compute the hex signature for a payload.

        Raises:
            ValueError: If no secret is configured
        """
        if not self.has_secret:
            raise ValueError("SSO secret is not configured")
        assert self._secret is not None
        return hmac.new(
            self._secret.get_secret_value().encode("utf-8"),
            payload.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def verify(self, payload: str, signature: str) -> bool:
        """Check a claimed signature against the payload.

        Args:
            payload: The payload string as received
            signature: The claimed hex signature

        Returns:
            True only if the signature matches exactly
        """
        if not self.has_secret:
            self._probe.secret_unavailable()
            return False

        expected = self.sign(payload)
        if hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
            self._probe.signature_verified()
            return True

        self._probe.signature_mismatch()
        return False
