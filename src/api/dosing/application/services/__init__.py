"""Application services for the dosing bounded context."""

from dosing.application.services.calculator_service import CalculatorSettingsService
from dosing.application.services.dose_service import DoseService

__all__ = [
    "CalculatorSettingsService",
    "DoseService",
]
