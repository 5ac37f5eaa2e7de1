"""SQLAlchemy ORM models for the dosing bounded context."""

from dosing.infrastructure.models.calculator_settings import CalculatorSettingsModel
from dosing.infrastructure.models.dose import DoseModel

__all__ = [
    "CalculatorSettingsModel",
    "DoseModel",
]
