"""User model definitions."""

from sqlalchemy import Column, DateTime, Integer, String
from clinic_booking.database import Base

PATIENT_ROLE = "patient"
ADMIN_ROLE = "admin"
ROLES = (PATIENT_ROLE, ADMIN_ROLE)


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String)
    last_name = Column(String)
    role = Column(String, nullable=False, default=PATIENT_ROLE)  # patient/admin
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    # Bumped on logout; tokens carrying an older version are rejected.
    session_version = Column(Integer, nullable=False, default=0)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
