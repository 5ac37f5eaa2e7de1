"""Exceptions raised by dosing application services."""


class DoseNotFoundError(Exception):
    """Raised when a dose id does not resolve for the requesting user.

    Raised both for ids that do not exist and for ids owned by someone else.
    """

    def __init__(self, dose_id: int):
        self.dose_id = dose_id
        super().__init__(f"Dose {dose_id} not found")
