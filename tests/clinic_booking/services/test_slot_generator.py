from datetime import date, datetime, timedelta

from clinic_booking.core.errors import ConflictError
from clinic_booking.models.slot import Slot
from clinic_booking.services.slot_generator import generate_slot_ranges, seed_admin_user, seed_slots
from clinic_booking.store.memory import InMemoryStore

MONDAY = date(2024, 6, 3)
SATURDAY = date(2024, 6, 8)


def all_slot_starts(store: InMemoryStore) -> list[datetime]:
    return [
        slot.start_at
        for slot, _ in store.list_slots_with_bookings(datetime(2000, 1, 1), datetime(2100, 1, 1))
    ]


def test_generate_slot_ranges_covers_business_hours_in_half_hours() -> None:
    ranges = list(generate_slot_ranges(MONDAY, days=1))

    assert len(ranges) == 16
    assert ranges[0] == (datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 9, 30))
    assert ranges[-1] == (datetime(2024, 6, 3, 16, 30), datetime(2024, 6, 3, 17, 0))
    assert all(end - start == timedelta(minutes=30) for start, end in ranges)


def test_generate_slot_ranges_skips_weekends() -> None:
    ranges = list(generate_slot_ranges(SATURDAY))

    days = sorted({start.date() for start, _ in ranges})

    # Saturday start: Sat/Sun skipped, Mon-Fri kept.
    assert days == [date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12), date(2024, 6, 13), date(2024, 6, 14)]
    assert len(ranges) == 80


def test_generate_slot_ranges_stays_within_horizon_starting_midweek() -> None:
    wednesday = date(2024, 6, 5)
    days = sorted({start.date() for start, _ in generate_slot_ranges(wednesday)})

    assert days == [date(2024, 6, 5), date(2024, 6, 6), date(2024, 6, 7), date(2024, 6, 10), date(2024, 6, 11)]


def test_seed_slots_is_idempotent() -> None:
    store = InMemoryStore()

    first_run = seed_slots(store, today=MONDAY)
    starts_after_first = all_slot_starts(store)
    second_run = seed_slots(store, today=MONDAY)

    assert first_run == 80
    assert second_run == 0
    assert all_slot_starts(store) == starts_after_first
    assert len(set(starts_after_first)) == len(starts_after_first)


def test_seed_slots_fills_only_missing_days_of_a_rolled_window() -> None:
    store = InMemoryStore()
    seed_slots(store, today=MONDAY)

    created = seed_slots(store, today=MONDAY + timedelta(days=1))

    # Tuesday's window reaches the following Monday.
    assert created == 16
    assert len(all_slot_starts(store)) == 96


def test_seed_slots_skips_slot_created_concurrently(monkeypatch) -> None:
    store = InMemoryStore()
    original_create = store.create_slot
    calls = {'count': 0}

    def flaky_create(slot: Slot) -> Slot:
        calls['count'] += 1
        if calls['count'] == 1:
            original_create(slot)
            raise ConflictError('duplicate')
        return original_create(slot)

    monkeypatch.setattr(store, 'create_slot', flaky_create)

    created = seed_slots(store, today=MONDAY, days=1)

    assert created == 15
    assert len(all_slot_starts(store)) == 16


def test_seed_admin_user_upserts_admin_account() -> None:
    store = InMemoryStore()

    admin = seed_admin_user(store, email='Admin@Clinic.com')
    again = seed_admin_user(store, email='admin@clinic.com')

    assert admin.id == 'local-admin@clinic.com'
    assert admin.role == 'admin'
    assert again is store.get_user(admin.id)
    assert again.created_at == admin.created_at
