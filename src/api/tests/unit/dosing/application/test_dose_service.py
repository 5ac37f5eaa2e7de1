"""Unit tests for DoseService."""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, create_autospec

import pytest
from sqlalchemy.exc import OperationalError

from dosing.application.exceptions import DoseNotFoundError
from dosing.application.observability import DosingServiceProbe
from dosing.application.services import DoseService
from dosing.domain import Dose, DoseDraft
from dosing.ports.repositories import IDoseRepository
from infrastructure.database.exceptions import StoreUnavailableError

USER_ID = 1


def _dose(dose_id: int, draft: DoseDraft, completed: bool = False) -> Dose:
    now = datetime.now(UTC)
    return Dose(
        id=dose_id,
        user_id=USER_ID,
        peptide=draft.peptide,
        dose=draft.dose,
        date=draft.date,
        notes=draft.notes,
        group_id=draft.group_id,
        completed=completed,
        created_at=now,
        updated_at=now,
    )


async def _store(user_id: int, drafts: list[DoseDraft]) -> list[Dose]:
    return [_dose(i + 1, draft) for i, draft in enumerate(drafts)]


@pytest.fixture
def mock_repository():
    repo = create_autospec(IDoseRepository, instance=True)
    repo.add_many = AsyncMock(side_effect=_store)
    return repo


@pytest.fixture
def mock_probe():
    return create_autospec(DosingServiceProbe, instance=True)


@pytest.fixture
def service(mock_repository, mock_session, mock_probe) -> DoseService:
    return DoseService(repository=mock_repository, session=mock_session, probe=mock_probe)


@pytest.fixture
def draft() -> DoseDraft:
    return DoseDraft(peptide="BPC-157", dose="250mcg", date=date(2026, 3, 1))


class TestListDoses:

    @pytest.mark.asyncio
    async def test_returns_repository_rows(self, service, mock_repository, draft):
        doses = [_dose(1, draft)]
        mock_repository.list_for_user = AsyncMock(return_value=doses)

        assert await service.list_doses(USER_ID) == doses
        mock_repository.list_for_user.assert_awaited_once_with(USER_ID)

    @pytest.mark.asyncio
    async def test_store_error_is_reported(self, service, mock_repository, mock_probe):
        mock_repository.list_for_user = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        with pytest.raises(StoreUnavailableError):
            await service.list_doses(USER_ID)

        mock_probe.operation_failed.assert_called_once_with(
            operation="list_doses", user_id=USER_ID, error="OperationalError"
        )


class TestCreateDose:

    @pytest.mark.asyncio
    async def test_creates_single_dose(self, service, mock_repository, mock_probe, draft):
        mock_repository.add = AsyncMock(return_value=_dose(5, draft))

        dose = await service.create_dose(USER_ID, draft)

        assert dose.id == 5
        mock_repository.add.assert_awaited_once_with(USER_ID, draft)
        mock_probe.doses_created.assert_called_once_with(
            user_id=USER_ID, count=1, group_id=None
        )


class TestCreateDoses:

    @pytest.mark.asyncio
    async def test_multi_dose_batch_shares_generated_group_id(self, service, draft):
        drafts = [draft, DoseDraft(peptide="BPC-157", dose="250mcg", date=date(2026, 3, 2))]

        doses = await service.create_doses(USER_ID, drafts)

        assert len(doses) == 2
        assert doses[0].group_id is not None
        assert len(doses[0].group_id) == 26
        assert doses[0].group_id == doses[1].group_id

    @pytest.mark.asyncio
    async def test_preserves_client_group_id(self, service, draft):
        drafts = [
            DoseDraft(peptide="A", dose="1", date=date(2026, 3, 1), group_id="series-1"),
            DoseDraft(peptide="A", dose="1", date=date(2026, 3, 2), group_id="series-1"),
        ]

        doses = await service.create_doses(USER_ID, drafts)

        assert [d.group_id for d in doses] == ["series-1", "series-1"]

    @pytest.mark.asyncio
    async def test_single_dose_batch_gets_no_group(self, service, draft):
        doses = await service.create_doses(USER_ID, [draft])

        assert doses[0].group_id is None

    @pytest.mark.asyncio
    async def test_returns_doses_in_input_order(self, service):
        drafts = [
            DoseDraft(peptide="A", dose="1", date=date(2026, 3, 5)),
            DoseDraft(peptide="A", dose="1", date=date(2026, 3, 1)),
        ]

        doses = await service.create_doses(USER_ID, drafts)

        assert [d.date for d in doses] == [date(2026, 3, 5), date(2026, 3, 1)]

    @pytest.mark.asyncio
    async def test_inserts_in_one_transaction(
        self, service, mock_repository, mock_session, draft
    ):
        await service.create_doses(USER_ID, [draft, draft, draft])

        mock_session.begin.assert_called_once()
        mock_repository.add_many.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_batch_rejected(self, service, mock_repository):
        with pytest.raises(ValueError):
            await service.create_doses(USER_ID, [])

        mock_repository.add_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_stores_nothing_and_raises(
        self, service, mock_repository, mock_probe, draft
    ):
        mock_repository.add_many = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("down"))
        )

        with pytest.raises(StoreUnavailableError):
            await service.create_doses(USER_ID, [draft, draft])

        mock_probe.doses_created.assert_not_called()


class TestUpdateDose:

    @pytest.mark.asyncio
    async def test_updates_fields(self, service, mock_repository, mock_probe, draft):
        mock_repository.update = AsyncMock(return_value=_dose(3, draft, completed=True))

        dose = await service.update_dose(USER_ID, 3, completed=True)

        assert dose.completed is True
        mock_repository.update.assert_awaited_once_with(
            USER_ID, 3, completed=True, notes=None
        )
        mock_probe.dose_updated.assert_called_once_with(user_id=USER_ID, dose_id=3)

    @pytest.mark.asyncio
    async def test_missing_dose_raises_not_found(self, service, mock_repository, mock_probe):
        mock_repository.update = AsyncMock(return_value=None)

        with pytest.raises(DoseNotFoundError) as exc_info:
            await service.update_dose(USER_ID, 99, notes="x")

        assert exc_info.value.dose_id == 99
        mock_probe.dose_not_found.assert_called_once_with(user_id=USER_ID, dose_id=99)


class TestDeleteDose:

    @pytest.mark.asyncio
    async def test_deletes(self, service, mock_repository, mock_probe):
        mock_repository.delete = AsyncMock(return_value=True)

        await service.delete_dose(USER_ID, 3)

        mock_repository.delete.assert_awaited_once_with(USER_ID, 3)
        mock_probe.dose_deleted.assert_called_once_with(user_id=USER_ID, dose_id=3)

    @pytest.mark.asyncio
    async def test_foreign_or_missing_dose_raises_not_found(
        self, service, mock_repository
    ):
        mock_repository.delete = AsyncMock(return_value=False)

        with pytest.raises(DoseNotFoundError):
            await service.delete_dose(USER_ID, 3)
