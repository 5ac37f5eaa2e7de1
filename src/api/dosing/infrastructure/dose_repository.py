"""PostgreSQL implementation of IDoseRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dosing.domain import Dose, DoseDraft
from dosing.infrastructure.models import DoseModel
from dosing.ports.repositories import IDoseRepository


class DoseRepository(IDoseRepository):
    """PostgreSQL-backed repository for doses.

    Every query filters on ``user_id``. The repository does not manage
    transactions; callers wrap calls in ``async with session.begin()``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(self, user_id: int) -> list[Dose]:
        """Return all of the user's doses ordered by date ascending."""
        stmt = (
            select(DoseModel)
            .where(DoseModel.user_id == user_id)
            .order_by(DoseModel.date.asc(), DoseModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def add(self, user_id: int, draft: DoseDraft) -> Dose:
        """Store one dose."""
        doses = await self.add_many(user_id, [draft])
        return doses[0]

    async def add_many(self, user_id: int, drafts: list[DoseDraft]) -> list[Dose]:
        """Store several doses, returned in input order."""
        models = [
            DoseModel(
                user_id=user_id,
                peptide=draft.peptide,
                dose=draft.dose,
                notes=draft.notes,
                date=draft.date,
                group_id=draft.group_id,
                completed=False,
            )
            for draft in drafts
        ]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_domain(model) for model in models]

    async def update(
        self,
        user_id: int,
        dose_id: int,
        completed: bool | None = None,
        notes: str | None = None,
    ) -> Dose | None:
        """Update the given fields; None leaves a field unchanged."""
        stmt = select(DoseModel).where(
            DoseModel.id == dose_id,
            DoseModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        if completed is not None:
            model.completed = completed
        if notes is not None:
            model.notes = notes

        await self._session.flush()
        return self._to_domain(model)

    async def delete(self, user_id: int, dose_id: int) -> bool:
        """Delete a dose owned by the user."""
        stmt = (
            delete(DoseModel)
            .where(DoseModel.id == dose_id, DoseModel.user_id == user_id)
            .returning(DoseModel.id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_domain(model: DoseModel) -> Dose:
        return Dose(
            id=model.id,
            user_id=model.user_id,
            peptide=model.peptide,
            dose=model.dose,
            date=model.date,
            notes=model.notes,
            group_id=model.group_id,
            completed=model.completed,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
