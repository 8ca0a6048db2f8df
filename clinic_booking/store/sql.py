"""SQLAlchemy-backed entity store."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clinic_booking.core.errors import AlreadyBookedError, ConflictError
from clinic_booking.models.booking import Booking
from clinic_booking.models.slot import Slot
from clinic_booking.models.user import User
from clinic_booking.store.base import EntityStore


class SqlStore(EntityStore):
    """Entity store over one SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def upsert_user(self, *, user_id, email, role, first_name, last_name, now) -> User:
        user = self.db.get(User, user_id)
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
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # Lost a first-login race for the same account; update the winner's row.
                self.db.rollback()
                user = self.db.get(User, user_id)
                if user is None:
                    raise
                self._refresh_user(user, email, role, first_name, last_name, now)
        else:
            self._refresh_user(user, email, role, first_name, last_name, now)

        self.db.refresh(user)
        return user

    def _refresh_user(self, user, email, role, first_name, last_name, now) -> None:
        user.email = email
        user.role = role
        user.first_name = first_name
        user.last_name = last_name
        user.updated_at = now
        self.db.commit()

    def revoke_sessions(self, user_id: str) -> None:
        self.db.query(User).filter(User.id == user_id).update(
            {User.session_version: User.session_version + 1},
            synchronize_session=False,
        )
        self.db.commit()

    def create_slot(self, slot: Slot) -> Slot:
        self.db.add(slot)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f'A slot already starts at {slot.start_at.isoformat()}.') from exc
        self.db.refresh(slot)
        return slot

    def get_slot(self, slot_id: str) -> Slot | None:
        return self.db.get(Slot, slot_id)

    def list_slots_with_bookings(self, window_start, window_end):
        rows = self.db.query(Slot, Booking).outerjoin(
            Booking, Booking.slot_id == Slot.id,
        ).filter(
            Slot.start_at >= window_start,
            Slot.start_at <= window_end,
        ).order_by(Slot.start_at.asc()).all()

        return [(slot, booking) for slot, booking in rows]

    def insert_booking(self, booking: Booking) -> Booking:
        self.db.add(booking)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if self.get_booking_by_slot(booking.slot_id) is not None:
                raise AlreadyBookedError() from exc
            raise

        self.db.refresh(booking)
        return booking

    def get_booking_by_slot(self, slot_id: str) -> Booking | None:
        return self.db.query(Booking).filter(Booking.slot_id == slot_id).first()

    def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        query = self.db.query(Booking)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)

        return query.order_by(Booking.created_at.desc()).all()
