"""Database infrastructure - shared engine and session primitives."""

from infrastructure.database.exceptions import (
    DatabaseError,
    StoreUnavailableError,
)

__all__ = [
    "DatabaseError",
    "StoreUnavailableError",
]
