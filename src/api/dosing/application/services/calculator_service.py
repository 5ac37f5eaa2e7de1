"""Calculator settings application service."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dosing.application.observability import (
    DefaultDosingServiceProbe,
    DosingServiceProbe,
)
from dosing.domain import CalculatorSettings
from dosing.ports.repositories import ICalculatorSettingsRepository
from infrastructure.database.exceptions import StoreUnavailableError


class CalculatorSettingsService:
    """Reads and saves a user's calculator settings."""

    def __init__(
        self,
        repository: ICalculatorSettingsRepository,
        session: AsyncSession,
        probe: DosingServiceProbe | None = None,
    ):
        self._repository = repository
        self._session = session
        self._probe = probe or DefaultDosingServiceProbe()

    async def get_settings(self, user_id: int) -> CalculatorSettings:
        """Return the user's saved settings, falling back to the defaults.

        Raises:
            StoreUnavailableError: If the store cannot be read
        """
        try:
            async with self._session.begin():
                settings = await self._repository.get(user_id)
        except (SQLAlchemyError, OSError) as e:
            self._probe.operation_failed(
                operation="get_settings", user_id=user_id, error=type(e).__name__
            )
            raise StoreUnavailableError("Failed to fetch settings") from e

        return settings or CalculatorSettings.defaults(user_id)

    async def save_settings(self, settings: CalculatorSettings) -> CalculatorSettings:
        """Insert or replace the user's settings.

        Raises:
            StoreUnavailableError: If the store cannot be written
        """
        try:
            async with self._session.begin():
                saved = await self._repository.upsert(settings)
        except (SQLAlchemyError, OSError) as e:
            self._probe.operation_failed(
                operation="save_settings",
                user_id=settings.user_id,
                error=type(e).__name__,
            )
            raise StoreUnavailableError("Failed to save settings") from e

        self._probe.calculator_settings_saved(user_id=saved.user_id)
        return saved
