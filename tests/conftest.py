import os
from datetime import date, datetime, timedelta

import pytest

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('SEED_ON_STARTUP', 'false')

from clinic_booking.services.ledger import BookingLedger  # noqa: E402
from clinic_booking.services.slot_generator import seed_slots  # noqa: E402
from clinic_booking.store.memory import InMemoryStore  # noqa: E402

# Monday.
SEED_DAY = date(2024, 6, 3)
CLOCK_START = datetime(2024, 6, 3, 8, 0)


class TickingClock:
    """Returns strictly increasing timestamps so creation order is observable."""

    def __init__(self, start: datetime = CLOCK_START, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


def add_user(store, user_id: str, role: str = 'patient'):
    return store.upsert_user(
        user_id=user_id,
        email=f'{user_id}@example.com',
        role=role,
        first_name=user_id,
        last_name='User',
        now=CLOCK_START,
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def memory_store() -> InMemoryStore:
    store = InMemoryStore()
    seed_slots(store, today=SEED_DAY)
    add_user(store, 'user1')
    add_user(store, 'user2')
    add_user(store, 'admin', role='admin')
    return store


@pytest.fixture
def ledger(memory_store, clock) -> BookingLedger:
    return BookingLedger(memory_store, clock=clock)


@pytest.fixture
def first_slot(memory_store):
    slot, _ = memory_store.list_slots_with_bookings(CLOCK_START, CLOCK_START + timedelta(days=7))[0]
    return slot


@pytest.fixture
def make_user():
    return add_user
