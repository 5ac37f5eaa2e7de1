"""Dosing domain layer."""

from dosing.domain.aggregates import CalculatorSettings, Dose
from dosing.domain.value_objects import DoseDraft, DoseUnit, new_group_id

__all__ = [
    "CalculatorSettings",
    "Dose",
    "DoseDraft",
    "DoseUnit",
    "new_group_id",
]
