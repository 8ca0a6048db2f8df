"""Typed failures raised by the ledger, the stores and the session gate.

The HTTP surface maps each family to a status code in ``clinic_booking.main``.
"""


class ClinicError(Exception):
    """Base class for expected, user-visible failures."""

    default_message = 'Request failed.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ClinicError):
    default_message = 'Not found.'


class SlotNotFoundError(NotFoundError):
    default_message = 'Slot not found'


class ConflictError(ClinicError):
    default_message = 'Conflict.'


class AlreadyBookedError(ConflictError):
    default_message = 'This slot is already booked'


class UnauthenticatedError(ClinicError):
    default_message = 'Authentication required'


class UnauthorizedError(ClinicError):
    default_message = 'Admin access required'


class InvalidInputError(ClinicError):
    default_message = 'Invalid request data'
