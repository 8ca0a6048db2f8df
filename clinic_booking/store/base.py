"""Entity store interface shared by the in-memory and SQL implementations."""

from abc import ABC, abstractmethod
from datetime import datetime

from clinic_booking.models.booking import Booking
from clinic_booking.models.slot import Slot
from clinic_booking.models.user import User


class EntityStore(ABC):
    """Create/read primitives over users, slots and bookings.

    Implementations own the one-booking-per-slot constraint: ``insert_booking``
    must check and insert atomically and raise ``AlreadyBookedError`` when the
    slot already carries a booking.
    """

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    def upsert_user(
        self,
        *,
        user_id: str,
        email: str,
        role: str,
        first_name: str | None,
        last_name: str | None,
        now: datetime,
    ) -> User:
        """Insert the user, or refresh role, names and ``updated_at`` if present."""

    @abstractmethod
    def revoke_sessions(self, user_id: str) -> None:
        """Invalidate every session token issued to the user so far."""

    @abstractmethod
    def create_slot(self, slot: Slot) -> Slot:
        """Persist a slot; raises ``ConflictError`` when ``start_at`` is taken."""

    @abstractmethod
    def get_slot(self, slot_id: str) -> Slot | None:
        ...

    @abstractmethod
    def list_slots_with_bookings(
        self,
        window_start: datetime,
        window_end: datetime,
    ) -> list[tuple[Slot, Booking | None]]:
        """Slots starting within ``[window_start, window_end]``, ascending by start."""

    @abstractmethod
    def insert_booking(self, booking: Booking) -> Booking:
        ...

    @abstractmethod
    def get_booking_by_slot(self, slot_id: str) -> Booking | None:
        ...

    @abstractmethod
    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        """Bookings with ``user`` and ``slot`` attached, newest first."""
