"""Authentication error taxonomy.

Every subclass of ``AuthenticationError`` is a client error and is reported
to callers with one generic message, so that a response never reveals
which check rejected the credentials.
"""


class AuthenticationError(Exception):
    """Base class for rejected SSO credentials."""

    pass


class CredentialsMissingError(AuthenticationError):
    """Raised when a request carries neither an SSO payload nor a usable bypass."""

    pass


class SignatureInvalidError(AuthenticationError):
    """Raised when the payload signature does not match, or is required but absent."""

    pass


class PayloadMalformedError(AuthenticationError):
    """Raised when the SSO payload cannot be decoded into a valid claim.

    Covers bad base64, bad UTF-8 or form encoding, and missing or invalid
    mandatory fields (``external_id``, ``username``).
    """

    pass
