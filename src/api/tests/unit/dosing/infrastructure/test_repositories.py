"""Unit tests for dosing repositories.

Statements are compiled with the PostgreSQL dialect and inspected; every
one of them must be scoped to the owning user.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from dosing.domain import CalculatorSettings, DoseDraft
from dosing.infrastructure.calculator_settings_repository import (
    CalculatorSettingsRepository,
)
from dosing.infrastructure.dose_repository import DoseRepository
from dosing.infrastructure.models import DoseModel
from dosing.ports.repositories import ICalculatorSettingsRepository, IDoseRepository


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add_all = MagicMock()
    return session


def _compiled(mock_session) -> str:
    stmt = mock_session.execute.call_args[0][0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestCalculatorSettingsRepository:

    def test_implements_protocol(self, mock_session):
        repo = CalculatorSettingsRepository(session=mock_session)
        assert isinstance(repo, ICalculatorSettingsRepository)

    @pytest.mark.asyncio
    async def test_upsert_targets_user_id(self, mock_session):
        repo = CalculatorSettingsRepository(session=mock_session)
        result = MagicMock()
        mock_session.execute.return_value = result
        result.scalar_one.return_value = MagicMock(
            user_id=7,
            syringe_size="1.0",
            peptide_amount=5.0,
            water_amount=2.0,
            desired_dose=250.0,
            dose_unit="mcg",
        )

        saved = await repo.upsert(CalculatorSettings.defaults(7))

        sql = _compiled(mock_session)
        assert "ON CONFLICT (user_id) DO UPDATE SET" in sql
        assert "updated_at = now()" in sql
        assert "RETURNING" in sql
        assert saved.user_id == 7

    @pytest.mark.asyncio
    async def test_get_returns_none_without_row(self, mock_session):
        repo = CalculatorSettingsRepository(session=mock_session)
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await repo.get(7) is None
        assert "calculator_settings.user_id = " in _compiled(mock_session)


class TestDoseRepository:

    def test_implements_protocol(self, mock_session):
        assert isinstance(DoseRepository(session=mock_session), IDoseRepository)

    @pytest.mark.asyncio
    async def test_list_is_scoped_and_ordered_by_date(self, mock_session):
        repo = DoseRepository(session=mock_session)
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = result

        assert await repo.list_for_user(7) == []

        sql = _compiled(mock_session)
        assert "WHERE doses.user_id = " in sql
        assert "ORDER BY doses.date ASC, doses.id ASC" in sql

    @pytest.mark.asyncio
    async def test_add_many_adds_models_in_order(self, mock_session):
        repo = DoseRepository(session=mock_session)
        drafts = [
            DoseDraft(peptide="A", dose="1", date=date(2026, 3, 2), group_id="g"),
            DoseDraft(peptide="B", dose="2", date=date(2026, 3, 1), notes="n"),
        ]

        await repo.add_many(7, drafts)

        models = mock_session.add_all.call_args[0][0]
        assert [m.peptide for m in models] == ["A", "B"]
        assert all(isinstance(m, DoseModel) for m in models)
        assert all(m.user_id == 7 for m in models)
        assert all(m.completed is False for m in models)
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_returns_none_for_foreign_dose(self, mock_session):
        repo = DoseRepository(session=mock_session)
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await repo.update(7, 3, completed=True) is None

        sql = _compiled(mock_session)
        assert "doses.id = " in sql
        assert "doses.user_id = " in sql
        mock_session.flush.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_leaves_omitted_fields(self, mock_session):
        repo = DoseRepository(session=mock_session)
        model = DoseModel(
            id=3,
            user_id=7,
            peptide="A",
            dose="1",
            date=date(2026, 3, 1),
            notes="keep me",
            group_id=None,
            completed=False,
        )
        result = MagicMock()
        result.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = result

        dose = await repo.update(7, 3, completed=True)

        assert dose is not None
        assert dose.completed is True
        assert dose.notes == "keep me"

    @pytest.mark.asyncio
    async def test_delete_is_scoped_to_user(self, mock_session):
        repo = DoseRepository(session=mock_session)
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await repo.delete(7, 3) is False

        sql = _compiled(mock_session)
        assert sql.startswith("DELETE FROM doses WHERE doses.id = ")
        assert "doses.user_id = " in sql
        assert "RETURNING doses.id" in sql
