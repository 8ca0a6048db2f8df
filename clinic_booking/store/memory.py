"""Dictionary-backed entity store for tests and local runs."""

from datetime import datetime
from threading import Lock

from clinic_booking.core.errors import AlreadyBookedError, ConflictError
from clinic_booking.models.booking import Booking
from clinic_booking.models.slot import Slot
from clinic_booking.models.user import User
from clinic_booking.store.base import EntityStore


class InMemoryStore(EntityStore):
    """Keeps entities in process memory.

    The mutex plays the part of the database's unique indexes: it is the
    storage layer's constraint, so callers never coordinate on their own.
    """

    def __init__(self):
        self._lock = Lock()
        self._users: dict[str, User] = {}
        self._slots: dict[str, Slot] = {}
        self._slot_ids_by_start: dict[datetime, str] = {}
        self._bookings: list[Booking] = []
        self._bookings_by_slot: dict[str, Booking] = {}

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def upsert_user(self, *, user_id, email, role, first_name, last_name, now) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                user = User(
                    id=user_id,
                    email=email,
                    role=role,
                    first_name=first_name,
                    last_name=last_name,
                    created_at=now,
                    updated_at=now,
                    session_version=0,
                )
                self._users[user_id] = user
            else:
                user.email = email
                user.role = role
                user.first_name = first_name
                user.last_name = last_name
                user.updated_at = now
            return user

    def revoke_sessions(self, user_id: str) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                user.session_version = (user.session_version or 0) + 1

    def create_slot(self, slot: Slot) -> Slot:
        with self._lock:
            if slot.start_at in self._slot_ids_by_start:
                raise ConflictError(f'A slot already starts at {slot.start_at.isoformat()}.')
            self._slots[slot.id] = slot
            self._slot_ids_by_start[slot.start_at] = slot.id
        return slot

    def get_slot(self, slot_id: str) -> Slot | None:
        return self._slots.get(slot_id)

    def list_slots_with_bookings(self, window_start, window_end):
        slots = [
            slot for slot in list(self._slots.values())
            if window_start <= slot.start_at <= window_end
        ]
        slots.sort(key=lambda slot: slot.start_at)
        return [(slot, self._bookings_by_slot.get(slot.id)) for slot in slots]

    def insert_booking(self, booking: Booking) -> Booking:
        with self._lock:
            if booking.slot_id in self._bookings_by_slot:
                raise AlreadyBookedError()
            booking.user = self._users.get(booking.user_id)
            booking.slot = self._slots.get(booking.slot_id)
            self._bookings_by_slot[booking.slot_id] = booking
            self._bookings.append(booking)
        return booking

    def get_booking_by_slot(self, slot_id: str) -> Booking | None:
        return self._bookings_by_slot.get(slot_id)

    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        bookings = [
            booking for booking in reversed(list(self._bookings))
            if user_id is None or booking.user_id == user_id
        ]
        # Stable sort: equal timestamps keep the later insert first.
        return sorted(bookings, key=lambda booking: booking.created_at, reverse=True)
