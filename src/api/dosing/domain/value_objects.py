"""Value objects for the dosing domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from ulid import ULID


class DoseUnit(StrEnum):
    """Unit the calculator's desired dose is expressed in."""

    MCG = "mcg"
    MG = "mg"


def new_group_id() -> str:
    """Generate an identifier shared by the doses of one recurring series."""
    return str(ULID())


@dataclass(frozen=True)
class DoseDraft:
    """A dose as submitted by a user, before it is stored.

    ``dose`` is free text ("250mcg", "2 units") and is not interpreted.
    ``date`` is a calendar date with no time of day.
    """

    peptide: str
    dose: str
    date: date
    notes: str | None = None
    group_id: str | None = None
