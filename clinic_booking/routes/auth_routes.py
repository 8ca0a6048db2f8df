import logging

from fastapi import APIRouter, Depends, Response

from clinic_booking.auth import session_tokens
from clinic_booking.auth.dependencies import (
    RequestContext,
    get_optional_request_context,
    get_request_context,
    get_store,
)
from clinic_booking.core import config
from clinic_booking.core.clock import utcnow
from clinic_booking.schemas import LoginRequest, MessageResponse, UserResponse
from clinic_booking.services.accounts import login_local_user
from clinic_booking.store.base import EntityStore

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


@router.post("/login", response_model=UserResponse)
def login(data: LoginRequest, response: Response, store: EntityStore = Depends(get_store)):
    user = login_local_user(store, data.email, data.role, now=utcnow())

    token = session_tokens.create_session_token(user.id, user.role, user.session_version or 0)
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=config.SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("User %s logged in as %s", user.id, user.role)
    return UserResponse.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    context: RequestContext | None = Depends(get_optional_request_context),
    store: EntityStore = Depends(get_store),
):
    if context is not None:
        store.revoke_sessions(context.user_id)
        logger.info("User %s logged out", context.user_id)
    response.delete_cookie(key=config.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out successfully")


@router.get("/auth/user", response_model=UserResponse)
def current_user(context: RequestContext = Depends(get_request_context)):
    return UserResponse.model_validate(context.user)
