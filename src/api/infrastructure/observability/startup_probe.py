"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, environment: str, version: str) -> None:
        """Record that the application lifespan started."""
        ...

    def sso_secret_missing(self, environment: str) -> None:
        """Record that no SSO secret is configured."""
        ...

    def unsigned_payloads_enabled(self) -> None:
        """Record that the unsigned SSO trust tier is active."""
        ...

    def dev_bypass_enabled(self, environment: str) -> None:
        """Record that the X-Dev-User-Id bypass is honored in this environment."""
        ...

    def application_stopped(self) -> None:
        """Record that the application lifespan finished."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, environment: str, version: str) -> None:
        """Record that the application lifespan started."""
        self._logger.info(
            "application_starting",
            environment=environment,
            version=version,
            **self._get_context_kwargs(),
        )

    def sso_secret_missing(self, environment: str) -> None:
        """Record that no SSO secret is configured."""
        self._logger.warning(
            "sso_secret_missing",
            environment=environment,
            **self._get_context_kwargs(),
        )

    def unsigned_payloads_enabled(self) -> None:
        """Record that the unsigned SSO trust tier is active."""
        self._logger.warning(
            "sso_unsigned_payloads_enabled",
            **self._get_context_kwargs(),
        )

    def dev_bypass_enabled(self, environment: str) -> None:
        """Record that the X-Dev-User-Id bypass is honored in this environment."""
        self._logger.warning(
            "dev_user_bypass_enabled",
            environment=environment,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that the application lifespan finished."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
