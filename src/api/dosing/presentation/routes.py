"""Dosing API routes: calculator settings and the dose calendar.

Every route authenticates through the session trust gate and only ever
touches rows owned by the authenticated user.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from dosing.application.exceptions import DoseNotFoundError
from dosing.application.services import CalculatorSettingsService, DoseService
from dosing.dependencies import get_calculator_settings_service, get_dose_service
from dosing.presentation.models import (
    BatchCreateDosesRequest,
    CalculatorSettingsRequest,
    CalculatorSettingsResponse,
    CreateDoseRequest,
    DeleteDoseResponse,
    DoseResponse,
    UpdateDoseRequest,
)
from iam.application.value_objects import AuthenticatedUser
from iam.dependencies.user import get_current_user
from infrastructure.database.exceptions import StoreUnavailableError

router = APIRouter(tags=["dosing"])

# doses.id is an INTEGER column
DoseId = Annotated[int, Path(ge=1, le=2**31 - 1, description="Dose id")]

_AUTH_RESPONSES: dict[int | str, dict[str, str]] = {
    401: {"description": "Invalid or missing SSO credentials"},
    500: {"description": "Internal server error"},
}


def _server_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def _dose_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Dose not found",
    )


@router.get(
    "/calculator",
    response_model=CalculatorSettingsResponse,
    summary="Get calculator settings",
    description="Returns the saved calculator settings, or the defaults if none were saved.",
    responses=_AUTH_RESPONSES,
)
async def get_calculator_settings(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[
        CalculatorSettingsService, Depends(get_calculator_settings_service)
    ],
) -> CalculatorSettingsResponse:
    """Get the user's calculator settings."""
    try:
        settings = await service.get_settings(current_user.id)
    except StoreUnavailableError:
        raise _server_error("Failed to fetch settings")
    return CalculatorSettingsResponse.from_domain(settings)


@router.post(
    "/calculator",
    response_model=CalculatorSettingsResponse,
    summary="Save calculator settings",
    responses={**_AUTH_RESPONSES, 422: {"description": "Invalid settings"}},
)
async def save_calculator_settings(
    request: CalculatorSettingsRequest,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[
        CalculatorSettingsService, Depends(get_calculator_settings_service)
    ],
) -> CalculatorSettingsResponse:
    """Insert or replace the user's calculator settings."""
    try:
        settings = await service.save_settings(request.to_domain(current_user.id))
    except StoreUnavailableError:
        raise _server_error("Failed to save settings")
    return CalculatorSettingsResponse.from_domain(settings)


@router.get(
    "/doses",
    response_model=list[DoseResponse],
    summary="List doses",
    description="Returns all of the user's doses ordered by date ascending.",
    responses=_AUTH_RESPONSES,
)
async def list_doses(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[DoseService, Depends(get_dose_service)],
) -> list[DoseResponse]:
    """List the user's doses."""
    try:
        doses = await service.list_doses(current_user.id)
    except StoreUnavailableError:
        raise _server_error("Failed to fetch doses")
    return [DoseResponse.from_domain(dose) for dose in doses]


@router.post(
    "/doses",
    response_model=DoseResponse,
    summary="Create a dose",
    responses={**_AUTH_RESPONSES, 422: {"description": "Invalid dose"}},
)
async def create_dose(
    request: CreateDoseRequest,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[DoseService, Depends(get_dose_service)],
) -> DoseResponse:
    """Add one dose to the user's calendar."""
    try:
        dose = await service.create_dose(current_user.id, request.to_domain())
    except StoreUnavailableError:
        raise _server_error("Failed to create dose")
    return DoseResponse.from_domain(dose)


@router.post(
    "/doses/batch",
    response_model=list[DoseResponse],
    summary="Create a recurring series of doses",
    description="""
Insert every dose in one transaction: either all are stored or none.

When more than one dose is submitted, doses without a `group_id` share a
server-generated one.
""",
    responses={**_AUTH_RESPONSES, 422: {"description": "Invalid or empty batch"}},
)
async def create_doses_batch(
    request: BatchCreateDosesRequest,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[DoseService, Depends(get_dose_service)],
) -> list[DoseResponse]:
    """Add a batch of doses atomically."""
    try:
        doses = await service.create_doses(
            current_user.id, [dose.to_domain() for dose in request.doses]
        )
    except StoreUnavailableError:
        raise _server_error("Failed to create doses")
    return [DoseResponse.from_domain(dose) for dose in doses]


@router.patch(
    "/doses/{dose_id}",
    response_model=DoseResponse,
    summary="Update a dose",
    description="Updates `completed` and/or `notes`. Omitted fields are left unchanged.",
    responses={**_AUTH_RESPONSES, 404: {"description": "Dose not found"}},
)
async def update_dose(
    dose_id: DoseId,
    request: UpdateDoseRequest,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[DoseService, Depends(get_dose_service)],
) -> DoseResponse:
    """Update completion state and/or notes of a dose."""
    try:
        dose = await service.update_dose(
            current_user.id,
            dose_id,
            completed=request.completed,
            notes=request.notes,
        )
    except DoseNotFoundError:
        raise _dose_not_found()
    except StoreUnavailableError:
        raise _server_error("Failed to update dose")
    return DoseResponse.from_domain(dose)


@router.delete(
    "/doses/{dose_id}",
    response_model=DeleteDoseResponse,
    summary="Delete a dose",
    responses={**_AUTH_RESPONSES, 404: {"description": "Dose not found"}},
)
async def delete_dose(
    dose_id: DoseId,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[DoseService, Depends(get_dose_service)],
) -> DeleteDoseResponse:
    """Delete a dose."""
    try:
        await service.delete_dose(current_user.id, dose_id)
    except DoseNotFoundError:
        raise _dose_not_found()
    except StoreUnavailableError:
        raise _server_error("Failed to delete dose")
    return DeleteDoseResponse(success=True)
