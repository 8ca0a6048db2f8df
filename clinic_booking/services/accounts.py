from datetime import datetime

from clinic_booking.core.errors import InvalidInputError
from clinic_booking.models.user import PATIENT_ROLE, ROLES, User
from clinic_booking.store.base import EntityStore


def local_user_id(email: str) -> str:
    return f'local-{email}'


def normalize_email(email: str | None) -> str:
    normalized = (email or '').strip().lower()
    if not normalized:
        raise InvalidInputError('Email is required')
    if '@' not in normalized:
        raise InvalidInputError('Email is invalid')
    return normalized


def normalize_role(role: str | None) -> str:
    normalized = (role or PATIENT_ROLE).strip().lower()
    if normalized not in ROLES:
        raise InvalidInputError(f'Role must be one of: {", ".join(ROLES)}')
    return normalized


def login_local_user(store: EntityStore, email: str | None, role: str | None, now: datetime) -> User:
    """Create or refresh the user behind a mocked local login."""
    email = normalize_email(email)
    role = normalize_role(role)

    return store.upsert_user(
        user_id=local_user_id(email),
        email=email,
        role=role,
        first_name=email.split('@', 1)[0],
        last_name='User',
        now=now,
    )
