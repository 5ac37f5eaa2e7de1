"""Dose calendar application service.

Owns the transaction boundary for every dose use case. Store errors are
reported through the probe and re-raised as ``StoreUnavailableError``.
"""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dosing.application.exceptions import DoseNotFoundError
from dosing.application.observability import (
    DefaultDosingServiceProbe,
    DosingServiceProbe,
)
from dosing.domain import Dose, DoseDraft, new_group_id
from dosing.ports.repositories import IDoseRepository
from infrastructure.database.exceptions import StoreUnavailableError

_STORE_ERRORS = (SQLAlchemyError, OSError)


class DoseService:
    """Application service for a user's dose calendar."""

    def __init__(
        self,
        repository: IDoseRepository,
        session: AsyncSession,
        probe: DosingServiceProbe | None = None,
    ):
        """Initialize DoseService with dependencies.

        Args:
            repository: Repository for dose persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._repository = repository
        self._session = session
        self._probe = probe or DefaultDosingServiceProbe()

    async def list_doses(self, user_id: int) -> list[Dose]:
        """Return the user's doses ordered by date ascending."""
        try:
            async with self._session.begin():
                return await self._repository.list_for_user(user_id)
        except _STORE_ERRORS as e:
            self._fail("list_doses", user_id, e)
            raise StoreUnavailableError("Failed to fetch doses") from e

    async def create_dose(self, user_id: int, draft: DoseDraft) -> Dose:
        """Add one dose to the user's calendar."""
        try:
            async with self._session.begin():
                dose = await self._repository.add(user_id, draft)
        except _STORE_ERRORS as e:
            self._fail("create_dose", user_id, e)
            raise StoreUnavailableError("Failed to create dose") from e

        self._probe.doses_created(user_id=user_id, count=1, group_id=dose.group_id)
        return dose

    async def create_doses(self, user_id: int, drafts: list[DoseDraft]) -> list[Dose]:
        """Add a batch of doses atomically.

        All doses are written in one transaction; if any insert fails none
        are kept. When the batch holds more than one dose, drafts without a
        group id share a freshly generated one so the series can be found
        again later.

        Args:
            user_id: Owning user
            drafts: Doses to create, returned in the same order

        Returns:
            The stored doses

        Raises:
            ValueError: If ``drafts`` is empty
            StoreUnavailableError: If the transaction fails
        """
        if not drafts:
            raise ValueError("At least one dose is required")

        if len(drafts) > 1 and any(draft.group_id is None for draft in drafts):
            group_id = new_group_id()
            drafts = [
                draft if draft.group_id is not None else replace(draft, group_id=group_id)
                for draft in drafts
            ]

        try:
            async with self._session.begin():
                doses = await self._repository.add_many(user_id, drafts)
        except _STORE_ERRORS as e:
            self._fail("create_doses", user_id, e)
            raise StoreUnavailableError("Failed to create doses") from e

        self._probe.doses_created(
            user_id=user_id, count=len(doses), group_id=doses[0].group_id
        )
        return doses

    async def update_dose(
        self,
        user_id: int,
        dose_id: int,
        completed: bool | None = None,
        notes: str | None = None,
    ) -> Dose:
        """Update completion state and/or notes of a dose.

        Raises:
            DoseNotFoundError: If the user owns no such dose
            StoreUnavailableError: If the store cannot be written
        """
        try:
            async with self._session.begin():
                dose = await self._repository.update(
                    user_id, dose_id, completed=completed, notes=notes
                )
        except _STORE_ERRORS as e:
            self._fail("update_dose", user_id, e)
            raise StoreUnavailableError("Failed to update dose") from e

        if dose is None:
            self._probe.dose_not_found(user_id=user_id, dose_id=dose_id)
            raise DoseNotFoundError(dose_id)

        self._probe.dose_updated(user_id=user_id, dose_id=dose_id)
        return dose

    async def delete_dose(self, user_id: int, dose_id: int) -> None:
        """Delete a dose.

        Raises:
            DoseNotFoundError: If the user owns no such dose
            StoreUnavailableError: If the store cannot be written
        """
        try:
            async with self._session.begin():
                deleted = await self._repository.delete(user_id, dose_id)
        except _STORE_ERRORS as e:
            self._fail("delete_dose", user_id, e)
            raise StoreUnavailableError("Failed to delete dose") from e

        if not deleted:
            self._probe.dose_not_found(user_id=user_id, dose_id=dose_id)
            raise DoseNotFoundError(dose_id)

        self._probe.dose_deleted(user_id=user_id, dose_id=dose_id)

    def _fail(self, operation: str, user_id: int, error: Exception) -> None:
        self._probe.operation_failed(
            operation=operation, user_id=user_id, error=type(error).__name__
        )
