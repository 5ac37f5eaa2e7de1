"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class StoreUnavailableError(DatabaseError):
    """Raised when the store cannot complete an operation.

    Covers connection failures as well as statement errors. Callers surface
    it as a server error; it never carries connection secrets.
    """

    pass
