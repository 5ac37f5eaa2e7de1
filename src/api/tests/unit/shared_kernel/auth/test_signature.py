"""Unit tests for SSO signature verification."""

import hashlib
import hmac
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from shared_kernel.auth import SignatureVerifier, SignatureVerifierProbe


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=SignatureVerifierProbe)


def _expected(secret: str, payload: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


class TestSign:
    """Tests for SignatureVerifier.sign."""

    def test_sign_is_lowercase_hex_hmac_sha256(self, mock_probe):
        """Signature should be the hex HMAC-SHA256 of the raw payload."""
        verifier = SignatureVerifier(secret=SecretStr("s3cr3t"), probe=mock_probe)

        signature = verifier.sign("bm9uY2U9YWJj")

        assert signature == _expected("s3cr3t", "bm9uY2U9YWJj")
        assert signature == signature.lower()
        assert len(signature) == 64

    def test_sign_without_secret_raises(self, mock_probe):
        """Signing is impossible without a secret."""
        verifier = SignatureVerifier(secret=None, probe=mock_probe)

        with pytest.raises(ValueError):
            verifier.sign("payload")


class TestVerify:
    """Tests for SignatureVerifier.verify."""

    def test_accepts_own_signature(self, verifier, alice_payload):
        """verify(p, sign(p)) should always hold."""
        assert verifier.verify(alice_payload, verifier.sign(alice_payload)) is True

    def test_records_verified_event(self, mock_probe):
        verifier = SignatureVerifier(secret=SecretStr("s3cr3t"), probe=mock_probe)

        verifier.verify("payload", verifier.sign("payload"))

        mock_probe.signature_verified.assert_called_once_with()

    @pytest.mark.parametrize(
        "signature",
        [
            "deadbeef",
            "",
            "0" * 64,
        ],
    )
    def test_rejects_other_signatures(self, mock_probe, signature):
        """Any string other than the exact hex digest is rejected."""
        verifier = SignatureVerifier(secret=SecretStr("s3cr3t"), probe=mock_probe)

        assert verifier.verify("payload", signature) is False
        mock_probe.signature_mismatch.assert_called_once_with()

    def test_comparison_is_case_sensitive(self, verifier):
        """Uppercase hex of the correct digest is still a mismatch."""
        signature = verifier.sign("payload").upper()

        assert verifier.verify("payload", signature) is False

    def test_rejects_prefix_of_signature(self, verifier):
        signature = verifier.sign("payload")

        assert verifier.verify("payload", signature[:32]) is False

    def test_signature_is_bound_to_payload(self, verifier):
        """A valid signature for one payload does not verify another."""
        signature = verifier.sign("payload-a")

        assert verifier.verify("payload-b", signature) is False

    def test_rejects_non_ascii_signature(self, verifier):
        assert verifier.verify("payload", "é" * 64) is False

    @pytest.mark.parametrize("secret", [None, SecretStr("")])
    def test_fails_closed_without_secret(self, mock_probe, secret):
        """Verification must fail when no secret is configured."""
        verifier = SignatureVerifier(secret=secret, probe=mock_probe)
        signature = _expected("", "payload")

        assert verifier.has_secret is False
        assert verifier.verify("payload", signature) is False
        mock_probe.secret_unavailable.assert_called_once_with()

    def test_secret_not_in_repr_of_settings_value(self):
        """SecretStr masks the secret when printed."""
        secret = SecretStr("s3cr3t")

        assert "s3cr3t" not in repr(secret)
        assert "s3cr3t" not in str(secret)
