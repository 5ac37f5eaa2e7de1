"""Request and response models for dosing API endpoints."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from dosing.domain import CalculatorSettings, Dose, DoseDraft, DoseUnit

# Largest value a NUMERIC(12,4) column holds, rounded down to whole units
MAX_CALCULATOR_VALUE = 99_999_999


class CalculatorSettingsRequest(BaseModel):
    """Request to save the calculator inputs.

    Attributes:
        syringe_size: Syringe capacity in mL, as shown in the UI
        peptide_amount: Peptide in the vial (mg)
        water_amount: Water added (mL)
        desired_dose: Target dose in ``dose_unit``
        dose_unit: mcg or mg
    """

    syringe_size: str = Field(
        ...,
        min_length=1,
        max_length=16,
        description="Syringe capacity in mL",
        examples=["0.3", "0.5", "1.0"],
    )
    peptide_amount: float = Field(
        ...,
        ge=0,
        le=MAX_CALCULATOR_VALUE,
        allow_inf_nan=False,
        description="Peptide amount (mg)",
    )
    water_amount: float = Field(
        ...,
        ge=0,
        le=MAX_CALCULATOR_VALUE,
        allow_inf_nan=False,
        description="Water amount (mL)",
    )
    desired_dose: float = Field(
        ...,
        ge=0,
        le=MAX_CALCULATOR_VALUE,
        allow_inf_nan=False,
        description="Desired dose",
    )
    dose_unit: DoseUnit = Field(..., description="Unit of the desired dose")

    def to_domain(self, user_id: int) -> CalculatorSettings:
        return CalculatorSettings(
            user_id=user_id,
            syringe_size=self.syringe_size,
            peptide_amount=self.peptide_amount,
            water_amount=self.water_amount,
            desired_dose=self.desired_dose,
            dose_unit=self.dose_unit,
        )


class CalculatorSettingsResponse(BaseModel):
    """Calculator settings; timestamps are null while only defaults exist."""

    user_id: int
    syringe_size: str
    peptide_amount: float
    water_amount: float
    desired_dose: float
    dose_unit: DoseUnit
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @classmethod
    def from_domain(cls, settings: CalculatorSettings) -> CalculatorSettingsResponse:
        """Convert domain CalculatorSettings to API response."""
        return cls(
            user_id=settings.user_id,
            syringe_size=settings.syringe_size,
            peptide_amount=settings.peptide_amount,
            water_amount=settings.water_amount,
            desired_dose=settings.desired_dose,
            dose_unit=settings.dose_unit,
            created_at=settings.created_at,
            updated_at=settings.updated_at,
        )


class CreateDoseRequest(BaseModel):
    """Request to add a dose to the calendar.

    Attributes:
        peptide: Peptide name
        dose: Free-text amount
        date: Calendar date (YYYY-MM-DD)
        notes: Optional notes
        group_id: Optional recurring series id
    """

    peptide: str = Field(..., min_length=1, max_length=255, examples=["BPC-157"])
    dose: str = Field(..., min_length=1, max_length=64, examples=["250mcg"])
    date: dt.date = Field(..., description="Calendar date (YYYY-MM-DD)")
    notes: str | None = Field(default=None, max_length=10_000)
    group_id: str | None = Field(default=None, min_length=1, max_length=64)

    def to_domain(self) -> DoseDraft:
        return DoseDraft(
            peptide=self.peptide,
            dose=self.dose,
            date=self.date,
            notes=self.notes,
            group_id=self.group_id,
        )


class BatchCreateDosesRequest(BaseModel):
    """Request to add a recurring series of doses in one transaction."""

    doses: list[CreateDoseRequest] = Field(..., min_length=1, max_length=1000)


class UpdateDoseRequest(BaseModel):
    """Request to update a dose. Omitted fields are left unchanged."""

    completed: bool | None = None
    notes: str | None = Field(default=None, max_length=10_000)


class DoseResponse(BaseModel):
    """A dose calendar entry."""

    id: int
    user_id: int
    peptide: str
    dose: str
    notes: str | None
    date: dt.date
    group_id: str | None
    completed: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_domain(cls, dose: Dose) -> DoseResponse:
        """Convert domain Dose to API response."""
        return cls(
            id=dose.id,
            user_id=dose.user_id,
            peptide=dose.peptide,
            dose=dose.dose,
            notes=dose.notes,
            date=dose.date,
            group_id=dose.group_id,
            completed=dose.completed,
            created_at=dose.created_at,
            updated_at=dose.updated_at,
        )


class DeleteDoseResponse(BaseModel):
    success: bool = True
