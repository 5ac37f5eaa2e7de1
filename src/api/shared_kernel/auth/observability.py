"""Domain probe for SSO signature verification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to payload signature checks. Events
never carry the secret, the payload or the signatures themselves.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SignatureVerifierProbe(Protocol):
    """Domain probe for signature verification."""

    def signature_verified(self) -> None:
        """Record that a payload signature matched."""
        ...

    def signature_mismatch(self) -> None:
        """Record that a payload signature did not match."""
        ...

    def secret_unavailable(self) -> None:
        """Record that verification failed closed because no secret is configured."""
        ...

    def with_context(self, context: ObservationContext) -> SignatureVerifierProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSignatureVerifierProbe:
    """Default implementation of SignatureVerifierProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultSignatureVerifierProbe:
        """Create a new probe with observation context bound."""
        return DefaultSignatureVerifierProbe(logger=self._logger, context=context)

    def signature_verified(self) -> None:
        """Record that a payload signature matched."""
        self._logger.debug(
            "sso_signature_verified",
            **self._get_context_kwargs(),
        )

    def signature_mismatch(self) -> None:
        """Record that a payload signature did not match."""
        self._logger.warning(
            "sso_signature_mismatch",
            **self._get_context_kwargs(),
        )

    def secret_unavailable(self) -> None:
        """Record that verification failed closed because no secret is configured."""
        self._logger.error(
            "sso_secret_unavailable",
            **self._get_context_kwargs(),
        )
