"""Discourse SSO payload codec.

A payload is base64 over a URL-encoded form such as
``nonce=abc&external_id=42&username=alice&email=a%40x.com``.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode

from shared_kernel.auth.exceptions import PayloadMalformedError

# Bounds of the columns claims are stored in (BIGINT, VARCHAR(255), VARCHAR(320))
MAX_EXTERNAL_ID = 2**63 - 1
MAX_USERNAME_LENGTH = 255
MAX_EMAIL_LENGTH = 320


@dataclass(frozen=True)
class SSOClaims:
    """Identity claim decoded from an SSO payload.

    ``external_id`` and ``username`` are mandatory; a claim is never built
    without them.
    """

    external_id: int
    username: str
    email: str | None = None
    name: str | None = None
    nonce: str | None = None


def decode_payload(payload: str) -> SSOClaims:
    """Decode a base64 SSO payload into claims.

    Args:
        payload: Base64-encoded, URL-encoded form fields

    Returns:
        SSOClaims with the recognized fields

    Raises:
        PayloadMalformedError: If the payload is not valid base64, UTF-8 or
            form encoding, or ``external_id``/``username`` is missing or invalid
    """
    # Line breaks are tolerated: some providers wrap base64 output at 60 columns
    compact = "".join(payload.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadMalformedError("Payload is not valid base64") from e

    try:
        text = raw.decode("utf-8")
        pairs = parse_qsl(text, errors="strict")
    except (UnicodeDecodeError, ValueError) as e:
        raise PayloadMalformedError("Payload is not valid form encoding") from e

    # First occurrence wins for repeated keys
    fields: dict[str, str] = {}
    for key, value in pairs:
        fields.setdefault(key, value)

    external_id = _parse_external_id(fields.get("external_id"))

    username = fields.get("username") or ""
    if not username.strip():
        raise PayloadMalformedError("Payload is missing username")
    if len(username) > MAX_USERNAME_LENGTH:
        raise PayloadMalformedError("Payload username is too long")

    email = fields.get("email") or None
    if email is not None and len(email) > MAX_EMAIL_LENGTH:
        raise PayloadMalformedError("Payload email is too long")

    return SSOClaims(
        external_id=external_id,
        username=username,
        email=email,
        name=fields.get("name") or None,
        nonce=fields.get("nonce") or None,
    )


def encode_payload(claims: SSOClaims) -> str:
    """Encode claims as a base64 SSO payload.

    Fields that are None are left out, so ``decode_payload`` returns an
    equal claim.
    """
    fields: list[tuple[str, str]] = []
    if claims.nonce is not None:
        fields.append(("nonce", claims.nonce))
    fields.append(("external_id", str(claims.external_id)))
    fields.append(("username", claims.username))
    if claims.email is not None:
        fields.append(("email", claims.email))
    if claims.name is not None:
        fields.append(("name", claims.name))

    return base64.b64encode(urlencode(fields).encode("utf-8")).decode("ascii")


def _parse_external_id(value: str | None) -> int:
    if value is None or not value.strip():
        raise PayloadMalformedError("Payload is missing external_id")
    digits = value.strip()
    # int() alone would also accept signs, underscores and non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        raise PayloadMalformedError("Payload external_id is not numeric")
    external_id = int(digits)
    if not 1 <= external_id <= MAX_EXTERNAL_ID:
        raise PayloadMalformedError("Payload external_id is out of range")
    return external_id
