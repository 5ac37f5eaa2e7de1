"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
the authentication context of a request rather than core business entities.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import TrustTier


@dataclass(frozen=True)
class SSOCredentials:
    """Raw SSO material extracted from request headers.

    Every field is optional; the trust gate decides which combination is
    acceptable.
    """

    payload: str | None = None
    signature: str | None = None
    dev_user_id: str | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Represents the user a protected request acts on behalf of.

    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.
    ``trust_tier`` records how the identity was established.
    """

    id: int
    external_id: int
    username: str
    email: str | None
    trust_tier: TrustTier
