"""PostgreSQL implementation of ICalculatorSettingsRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from dosing.domain import CalculatorSettings, DoseUnit
from dosing.infrastructure.models import CalculatorSettingsModel
from dosing.ports.repositories import ICalculatorSettingsRepository


class CalculatorSettingsRepository(ICalculatorSettingsRepository):
    """PostgreSQL-backed repository for calculator settings.

    The repository does not manage transactions; callers wrap calls in
    ``async with session.begin()``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> CalculatorSettings | None:
        """Return the user's saved settings, or None if never saved."""
        stmt = select(CalculatorSettingsModel).where(
            CalculatorSettingsModel.user_id == user_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    async def upsert(self, settings: CalculatorSettings) -> CalculatorSettings:
        """Insert or replace the user's settings with one statement."""
        values = {
            "syringe_size": settings.syringe_size,
            "peptide_amount": settings.peptide_amount,
            "water_amount": settings.water_amount,
            "desired_dose": settings.desired_dose,
            "dose_unit": settings.dose_unit.value,
        }
        stmt = insert(CalculatorSettingsModel).values(user_id=settings.user_id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[CalculatorSettingsModel.user_id],
            set_={**values, "updated_at": func.now()},
        ).returning(CalculatorSettingsModel)

        result = await self._session.execute(
            stmt, execution_options={"populate_existing": True}
        )
        return self._to_domain(result.scalar_one())

    @staticmethod
    def _to_domain(model: CalculatorSettingsModel) -> CalculatorSettings:
        return CalculatorSettings(
            user_id=model.user_id,
            syringe_size=model.syringe_size,
            peptide_amount=model.peptide_amount,
            water_amount=model.water_amount,
            desired_dose=model.desired_dose,
            dose_unit=DoseUnit(model.dose_unit),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
