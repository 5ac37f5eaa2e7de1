"""Protocol for authentication observability.

Defines the interface for domain probes that capture authentication events
for the session trust gate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(
        self,
        user_id: int,
        username: str,
        trust_tier: str,
    ) -> None:
        """Record a successful authentication and how it was established."""
        ...

    def authentication_failed(
        self,
        reason: str,
    ) -> None:
        """Record authentication failure.

        Args:
            reason: Failure reason (missing_credentials, invalid_signature,
                unsigned_rejected, malformed_payload)
        """
        ...

    def dev_bypass_used(self, dev_user_id: int, environment: str) -> None:
        """Record that the development identity header was honored."""
        ...

    def dev_bypass_ignored(self, environment: str) -> None:
        """Record that the development identity header was ignored."""
        ...

    def unsigned_payload_accepted(self, external_id: int) -> None:
        """Record that an SSO payload was trusted without a signature."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_authenticated(
        self,
        user_id: int,
        username: str,
        trust_tier: str,
    ) -> None:
        """Record a successful authentication."""
        self._logger.info(
            "user_authenticated",
            user_id=user_id,
            username=username,
            trust_tier=trust_tier,
            **self._get_context_kwargs(),
        )

    def authentication_failed(
        self,
        reason: str,
    ) -> None:
        """Record authentication failure."""
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def dev_bypass_used(self, dev_user_id: int, environment: str) -> None:
        """Record that the development identity header was honored."""
        self._logger.warning(
            "dev_bypass_used",
            dev_user_id=dev_user_id,
            environment=environment,
            trust_tier="bypass",
            **self._get_context_kwargs(),
        )

    def dev_bypass_ignored(self, environment: str) -> None:
        """Record that the development identity header was ignored."""
        self._logger.warning(
            "dev_bypass_ignored",
            environment=environment,
            **self._get_context_kwargs(),
        )

    def unsigned_payload_accepted(self, external_id: int) -> None:
        """Record that an SSO payload was trusted without a signature."""
        self._logger.info(
            "unsigned_payload_accepted",
            external_id=external_id,
            trust_tier="unsigned",
            **self._get_context_kwargs(),
        )
