"""Repository port protocols for the dosing bounded context.

Every operation is scoped by ``user_id``; a row owned by another user is
indistinguishable from a missing one.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dosing.domain import CalculatorSettings, Dose, DoseDraft


@runtime_checkable
class ICalculatorSettingsRepository(Protocol):
    """Repository for per-user calculator settings."""

    async def get(self, user_id: int) -> CalculatorSettings | None:
        """Return the user's saved settings, or None if never saved."""
        ...

    async def upsert(self, settings: CalculatorSettings) -> CalculatorSettings:
        """Insert or replace the user's settings and return the stored row."""
        ...


@runtime_checkable
class IDoseRepository(Protocol):
    """Repository for dose calendar entries."""

    async def list_for_user(self, user_id: int) -> list[Dose]:
        """Return all of the user's doses ordered by date ascending."""
        ...

    async def add(self, user_id: int, draft: DoseDraft) -> Dose:
        """Store one dose."""
        ...

    async def add_many(self, user_id: int, drafts: list[DoseDraft]) -> list[Dose]:
        """Store several doses, returned in input order."""
        ...

    async def update(
        self,
        user_id: int,
        dose_id: int,
        completed: bool | None = None,
        notes: str | None = None,
    ) -> Dose | None:
        """Update the given fields; None leaves a field unchanged.

        Returns:
            The updated dose, or None if the user owns no such dose
        """
        ...

    async def delete(self, user_id: int, dose_id: int) -> bool:
        """Delete a dose.

        Returns:
            True if a row was deleted, False if the user owns no such dose
        """
        ...
