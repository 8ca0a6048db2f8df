"""Seed-time generation of bookable slots for the rolling horizon."""

import logging
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta

from clinic_booking.core import config
from clinic_booking.core.clock import new_id, utcnow
from clinic_booking.core.errors import ConflictError
from clinic_booking.models.slot import Slot
from clinic_booking.models.user import ADMIN_ROLE, User
from clinic_booking.services.accounts import login_local_user
from clinic_booking.store.base import EntityStore

logger = logging.getLogger(__name__)

OPEN_TIME = time(9, 0)
CLOSE_TIME = time(17, 0)
SLOT_DURATION_MINUTES = 30
SEED_HORIZON_DAYS = 7


def generate_slot_ranges(today: date, days: int = SEED_HORIZON_DAYS) -> Iterator[tuple[datetime, datetime]]:
    """Yield ``(start, end)`` UTC ranges for every weekday half hour in the horizon."""
    duration = timedelta(minutes=SLOT_DURATION_MINUTES)

    for offset in range(days):
        current_day = today + timedelta(days=offset)
        if current_day.weekday() >= 5:
            continue

        current_start = datetime.combine(current_day, OPEN_TIME)
        day_close = datetime.combine(current_day, CLOSE_TIME)
        while current_start < day_close:
            yield current_start, current_start + duration
            current_start += duration


def seed_slots(store: EntityStore, today: date | None = None, days: int = SEED_HORIZON_DAYS) -> int:
    """Create the horizon's slots that do not exist yet; returns how many were created."""
    today = today or utcnow().date()
    window_start = datetime.combine(today, time(0, 0))
    window_end = datetime.combine(today + timedelta(days=days), time(0, 0))

    existing_starts = {
        slot.start_at for slot, _ in store.list_slots_with_bookings(window_start, window_end)
    }

    created = 0
    now = utcnow()
    for start_at, end_at in generate_slot_ranges(today, days):
        if start_at in existing_starts:
            continue
        try:
            store.create_slot(Slot(id=new_id(), start_at=start_at, end_at=end_at, created_at=now))
        except ConflictError:
            logger.warning('Slot at %s was created concurrently; skipping', start_at.isoformat())
            continue
        created += 1

    if created:
        logger.info('Generated %d appointment slots starting %s', created, today.isoformat())
    else:
        logger.debug('Appointment slots already present for %s', today.isoformat())
    return created


def seed_admin_user(store: EntityStore, email: str | None = None) -> User:
    return login_local_user(store, email or config.ADMIN_EMAIL, role=ADMIN_ROLE, now=utcnow())
