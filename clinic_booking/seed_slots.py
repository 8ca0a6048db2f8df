"""Seed the admin account and the rolling week of appointment slots.

Usage:
    python -m clinic_booking.seed_slots [--days N]
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from clinic_booking.database import Base, SessionLocal, engine, ensure_booking_schema
from clinic_booking.models import booking, slot, user  # noqa: F401  (register tables)
from clinic_booking.services.slot_generator import SEED_HORIZON_DAYS, seed_admin_user, seed_slots
from clinic_booking.store.sql import SqlStore


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--days", type=int, default=SEED_HORIZON_DAYS)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    db = SessionLocal()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_booking_schema()
        store = SqlStore(db)
        seed_admin_user(store)
        created = seed_slots(store, days=args.days)
    except SQLAlchemyError as exc:
        print("Seeding failed:", exc, file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    print(f"Created {created} slots.")


if __name__ == "__main__":
    main()
