"""Authentication shared kernel module.

Leaf building blocks of the Discourse SSO handshake: the payload codec,
the signature verifier and the error taxonomy.
"""

from shared_kernel.auth.exceptions import (
    AuthenticationError,
    CredentialsMissingError,
    PayloadMalformedError,
    SignatureInvalidError,
)
from shared_kernel.auth.observability import (
    DefaultSignatureVerifierProbe,
    SignatureVerifierProbe,
)
from shared_kernel.auth.payload import SSOClaims, decode_payload, encode_payload
from shared_kernel.auth.signature import SignatureVerifier

__all__ = [
    "AuthenticationError",
    "CredentialsMissingError",
    "DefaultSignatureVerifierProbe",
    "PayloadMalformedError",
    "SSOClaims",
    "SignatureInvalidError",
    "SignatureVerifier",
    "SignatureVerifierProbe",
    "decode_payload",
    "encode_payload",
]
