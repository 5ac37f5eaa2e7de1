"""Value objects for IAM domain."""

from __future__ import annotations

from enum import StrEnum


class TrustTier(StrEnum):
    """How strongly an authenticated identity was established.

    BYPASS: development-only identifier header, no SSO involved.
    SIGNED: SSO payload whose HMAC signature was verified.
    UNSIGNED: SSO payload accepted without a signature (deployment policy).
    """

    BYPASS = "bypass"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
