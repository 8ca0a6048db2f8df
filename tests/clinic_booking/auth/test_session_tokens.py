import jwt
import pytest

from clinic_booking.auth.session_tokens import create_session_token, decode_session_token
from clinic_booking.core import config
from clinic_booking.core.errors import UnauthenticatedError


def test_session_token_round_trip_carries_user_and_role() -> None:
    token = create_session_token('local-jane@example.com', 'patient', session_version=3)

    payload = decode_session_token(token)

    assert payload['sub'] == 'local-jane@example.com'
    assert payload['role'] == 'patient'
    assert payload['ver'] == 3
    assert payload['exp'] > payload['iat']


def test_expired_session_token_is_rejected() -> None:
    token = create_session_token('local-jane@example.com', 'patient', expires_minutes=-5)

    with pytest.raises(UnauthenticatedError) as exception_info:
        decode_session_token(token)

    assert exception_info.value.message == 'Session expired'


def test_session_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode({'sub': 'local-eve@example.com'}, 'not-the-secret', algorithm=config.SESSION_ALGORITHM)

    with pytest.raises(UnauthenticatedError) as exception_info:
        decode_session_token(token)

    assert exception_info.value.message == 'Invalid session'


def test_session_token_without_subject_is_rejected() -> None:
    token = jwt.encode({'role': 'admin'}, config.SESSION_SECRET, algorithm=config.SESSION_ALGORITHM)

    with pytest.raises(UnauthenticatedError):
        decode_session_token(token)
