from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clinic_booking.auth import session_tokens
from clinic_booking.core import config
from clinic_booking.core.errors import UnauthenticatedError, UnauthorizedError
from clinic_booking.database import get_db
from clinic_booking.models.user import User
from clinic_booking.services.ledger import BookingLedger
from clinic_booking.store.base import EntityStore
from clinic_booking.store.sql import SqlStore

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """The authenticated caller, resolved once per request."""
    user: User

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role


@dataclass(frozen=True)
class AdminContext(RequestContext):
    """A caller already proven to hold the admin role."""


def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return SqlStore(db)


def get_ledger(store: EntityStore = Depends(get_store)) -> BookingLedger:
    return BookingLedger(store)


def read_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(config.SESSION_COOKIE_NAME)


def get_request_context(
    token: str | None = Depends(read_session_token),
    store: EntityStore = Depends(get_store),
) -> RequestContext:
    if not token:
        raise UnauthenticatedError()

    payload = session_tokens.decode_session_token(token)
    user = store.get_user(payload["sub"])
    if user is None:
        raise UnauthenticatedError("User not found")
    if payload.get("ver", 0) != (user.session_version or 0):
        raise UnauthenticatedError("Session ended")
    return RequestContext(user=user)


def get_optional_request_context(
    token: str | None = Depends(read_session_token),
    store: EntityStore = Depends(get_store),
) -> RequestContext | None:
    try:
        return get_request_context(token=token, store=store)
    except UnauthenticatedError:
        return None


def require_admin(context: RequestContext = Depends(get_request_context)) -> AdminContext:
    if not context.user.is_admin:
        raise UnauthorizedError()
    return AdminContext(user=context.user)
