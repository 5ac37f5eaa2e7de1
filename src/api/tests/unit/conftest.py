"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from shared_kernel.auth import (
    SSOClaims,
    SignatureVerifier,
    SignatureVerifierProbe,
    encode_payload,
)

TEST_SSO_SECRET = "s3cr3t"


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
    )


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def verifier() -> SignatureVerifier:
    """Signature verifier holding the test secret."""
    return SignatureVerifier(
        secret=SecretStr(TEST_SSO_SECRET),
        probe=MagicMock(spec=SignatureVerifierProbe),
    )


@pytest.fixture
def alice_payload() -> str:
    """Base64 SSO payload for forum user 42, alice."""
    return encode_payload(
        SSOClaims(external_id=42, username="alice", email="a@x.com", nonce="abc")
    )
