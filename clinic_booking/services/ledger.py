"""Booking ledger: one booking per slot, plus the availability read model."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from clinic_booking.core.clock import new_id, utcnow
from clinic_booking.core.errors import AlreadyBookedError, InvalidInputError, SlotNotFoundError
from clinic_booking.models.booking import Booking
from clinic_booking.models.slot import Slot
from clinic_booking.store.base import EntityStore

logger = logging.getLogger(__name__)

AVAILABILITY_WINDOW_DAYS = 7
STATUS_SCHEDULED = 'scheduled'
STATUS_COMPLETED = 'completed'


@dataclass(frozen=True)
class BookingStats:
    today_count: int
    this_week_count: int
    unique_patients: int
    total_bookings: int


class BookingLedger:
    """Arbitrates booking attempts and serves the slot availability view.

    Conflicts are settled by the store's uniqueness constraint on the slot
    reference; the ledger holds no locks of its own, so several processes may
    share one durable store.
    """

    def __init__(self, store: EntityStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    def attempt_booking(self, user_id: str, slot_id: str) -> Booking:
        slot_id = (slot_id or '').strip()
        if not slot_id:
            raise InvalidInputError('Slot id is required.')

        # Slots are never deleted, so this check cannot go stale before the insert.
        if self.store.get_slot(slot_id) is None:
            raise SlotNotFoundError()

        booking = Booking(
            id=new_id(),
            user_id=user_id,
            slot_id=slot_id,
            created_at=self.clock(),
        )
        try:
            booking = self.store.insert_booking(booking)
        except AlreadyBookedError:
            logger.info('Booking conflict for slot %s by user %s', slot_id, user_id)
            raise

        logger.info('User %s booked slot %s', user_id, slot_id)
        return booking

    def list_availability(
        self,
        window_start: datetime | None = None,
        window_end: datetime | None = None,
    ) -> list[tuple[Slot, Booking | None]]:
        if window_start is None:
            window_start = self.clock()
        if window_end is None:
            window_end = window_start + timedelta(days=AVAILABILITY_WINDOW_DAYS)
        if window_end < window_start:
            raise InvalidInputError('Window end must not precede window start.')

        return self.store.list_slots_with_bookings(window_start, window_end)

    def list_bookings_for_user(self, user_id: str) -> list[Booking]:
        return _with_details(self.store.list_bookings(user_id=user_id))

    def list_all_bookings(self) -> list[Booking]:
        # Callers reach this only through the admin gate.
        return _with_details(self.store.list_bookings())

    def booking_status(self, booking: Booking) -> str:
        if booking.slot is not None and booking.slot.start_at < self.clock():
            return STATUS_COMPLETED
        return STATUS_SCHEDULED

    def booking_stats(self) -> BookingStats:
        bookings = self.store.list_bookings()
        day_start = datetime.combine(self.clock().date(), time(0, 0))
        day_end = day_start + timedelta(days=1)
        week_start = day_start - timedelta(days=day_start.weekday())
        week_end = week_start + timedelta(days=7)

        slot_starts = [booking.slot.start_at for booking in bookings if booking.slot is not None]

        return BookingStats(
            today_count=sum(1 for start in slot_starts if day_start <= start < day_end),
            this_week_count=sum(1 for start in slot_starts if week_start <= start < week_end),
            unique_patients=len({booking.user_id for booking in bookings}),
            total_bookings=len(bookings),
        )


def _with_details(bookings: list[Booking]) -> list[Booking]:
    return [booking for booking in bookings if booking.user is not None and booking.slot is not None]
