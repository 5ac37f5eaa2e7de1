"""Domain-Oriented Observability for the dosing application layer."""

from dosing.application.observability.dosing_service_probe import (
    DefaultDosingServiceProbe,
    DosingServiceProbe,
)

__all__ = [
    "DosingServiceProbe",
    "DefaultDosingServiceProbe",
]
