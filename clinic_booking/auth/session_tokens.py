from datetime import datetime, timedelta, timezone

import jwt

from clinic_booking.core import config
from clinic_booking.core.errors import UnauthenticatedError


def create_session_token(
    user_id: str,
    role: str,
    session_version: int = 0,
    expires_minutes: int | None = None,
) -> str:
    expire_minutes = expires_minutes or config.SESSION_TTL_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "ver": session_version,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.SESSION_SECRET, algorithm=config.SESSION_ALGORITHM)


def decode_session_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, config.SESSION_SECRET, algorithms=[config.SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthenticatedError("Session expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthenticatedError("Invalid session") from exc

    if not payload.get("sub"):
        raise UnauthenticatedError("Invalid session subject")
    return payload
