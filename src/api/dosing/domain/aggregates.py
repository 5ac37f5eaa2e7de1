"""Aggregates for the dosing bounded context.

Both aggregates are owned by exactly one user and are never visible to
anyone else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from dosing.domain.value_objects import DoseUnit


@dataclass(frozen=True)
class CalculatorSettings:
    """Reconstitution calculator inputs a user last saved.

    Attributes:
        user_id: Owning user
        syringe_size: Syringe capacity in mL, kept as entered ("0.3", "1.0")
        peptide_amount: Peptide in the vial, in mg
        water_amount: Bacteriostatic water added, in mL
        desired_dose: Target dose, in ``dose_unit``
        dose_unit: Unit of ``desired_dose``
        created_at: None until the settings are stored
        updated_at: None until the settings are stored
    """

    user_id: int
    syringe_size: str
    peptide_amount: float
    water_amount: float
    desired_dose: float
    dose_unit: DoseUnit
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def defaults(cls, user_id: int) -> CalculatorSettings:
        """Settings shown to a user who never saved any."""
        return cls(
            user_id=user_id,
            syringe_size="1.0",
            peptide_amount=5,
            water_amount=2,
            desired_dose=250,
            dose_unit=DoseUnit.MCG,
        )

    @property
    def is_persisted(self) -> bool:
        return self.created_at is not None


@dataclass(frozen=True)
class Dose:
    """A scheduled dose on the user's calendar."""

    id: int
    user_id: int
    peptide: str
    dose: str
    date: date
    notes: str | None
    group_id: str | None
    completed: bool
    created_at: datetime
    updated_at: datetime
