"""Port interfaces for the dosing bounded context."""

from dosing.ports.repositories import ICalculatorSettingsRepository, IDoseRepository

__all__ = [
    "ICalculatorSettingsRepository",
    "IDoseRepository",
]
