"""Booking model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from clinic_booking.database import Base
from clinic_booking.models.slot import Slot
from clinic_booking.models.user import User


class Booking(Base):
    """Represents a user's claim on exactly one slot."""
    __tablename__ = "bookings"
    __table_args__ = (
        # Load-bearing: the storage layer rejects a second booking for a slot.
        UniqueConstraint("slot_id", name="uq_bookings_slot_id"),
    )

    id = Column(String(36), primary_key=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    slot_id = Column(String(36), ForeignKey("slots.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    user = relationship(User, lazy="joined")
    slot = relationship(Slot, lazy="joined")
