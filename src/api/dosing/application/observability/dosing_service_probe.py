"""Protocol for dosing application service observability.

Defines the interface for domain probes that capture application-level
domain events for calculator settings and dose calendar operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DosingServiceProbe(Protocol):
    """Domain probe for dosing application service operations."""

    def calculator_settings_saved(self, user_id: int) -> None:
        """Record that a user's calculator settings were stored."""
        ...

    def doses_created(self, user_id: int, count: int, group_id: str | None) -> None:
        """Record that doses were added to a user's calendar."""
        ...

    def dose_updated(self, user_id: int, dose_id: int) -> None:
        """Record that a dose was updated."""
        ...

    def dose_deleted(self, user_id: int, dose_id: int) -> None:
        """Record that a dose was deleted."""
        ...

    def dose_not_found(self, user_id: int, dose_id: int) -> None:
        """Record that a dose id did not resolve for the user."""
        ...

    def operation_failed(self, operation: str, user_id: int, error: str) -> None:
        """Record that a dosing operation failed in the store."""
        ...

    def with_context(self, context: ObservationContext) -> DosingServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDosingServiceProbe:
    """Default implementation of DosingServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDosingServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultDosingServiceProbe(logger=self._logger, context=context)

    def calculator_settings_saved(self, user_id: int) -> None:
        self._logger.info(
            "calculator_settings_saved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def doses_created(self, user_id: int, count: int, group_id: str | None) -> None:
        self._logger.info(
            "doses_created",
            user_id=user_id,
            count=count,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def dose_updated(self, user_id: int, dose_id: int) -> None:
        self._logger.info(
            "dose_updated",
            user_id=user_id,
            dose_id=dose_id,
            **self._get_context_kwargs(),
        )

    def dose_deleted(self, user_id: int, dose_id: int) -> None:
        self._logger.info(
            "dose_deleted",
            user_id=user_id,
            dose_id=dose_id,
            **self._get_context_kwargs(),
        )

    def dose_not_found(self, user_id: int, dose_id: int) -> None:
        self._logger.debug(
            "dose_not_found",
            user_id=user_id,
            dose_id=dose_id,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, user_id: int, error: str) -> None:
        self._logger.error(
            "dosing_operation_failed",
            operation=operation,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
