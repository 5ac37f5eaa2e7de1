"""FastAPI dependency injection for the dosing bounded context.

Repositories and services share the request's session through FastAPI's
per-request dependency cache.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dosing.application.observability import (
    DefaultDosingServiceProbe,
    DosingServiceProbe,
)
from dosing.application.services import CalculatorSettingsService, DoseService
from dosing.infrastructure.calculator_settings_repository import (
    CalculatorSettingsRepository,
)
from dosing.infrastructure.dose_repository import DoseRepository
from infrastructure.database.dependencies import get_session


def get_dosing_service_probe() -> DosingServiceProbe:
    """Get DosingServiceProbe instance."""
    return DefaultDosingServiceProbe()


def get_calculator_settings_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[DosingServiceProbe, Depends(get_dosing_service_probe)],
) -> CalculatorSettingsService:
    """Get CalculatorSettingsService instance.

    Args:
        session: Async database session
        probe: Dosing service probe for observability

    Returns:
        CalculatorSettingsService instance
    """
    return CalculatorSettingsService(
        repository=CalculatorSettingsRepository(session=session),
        session=session,
        probe=probe,
    )


def get_dose_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[DosingServiceProbe, Depends(get_dosing_service_probe)],
) -> DoseService:
    """Get DoseService instance.

    Args:
        session: Async database session
        probe: Dosing service probe for observability

    Returns:
        DoseService instance
    """
    return DoseService(
        repository=DoseRepository(session=session),
        session=session,
        probe=probe,
    )
