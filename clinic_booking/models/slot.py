"""Slot model definitions."""

from sqlalchemy import Column, DateTime, String
from clinic_booking.database import Base


class Slot(Base):
    """Represents an immutable 30-minute appointment slot."""
    __tablename__ = "slots"

    id = Column(String(36), primary_key=True)
    start_at = Column(DateTime, nullable=False, unique=True, index=True)
    end_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)
