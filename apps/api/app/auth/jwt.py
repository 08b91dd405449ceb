from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from jwt import PyJWTError

from app.auth.identity import Identity
from app.core.config import settings
from app.services.error_codes import ErrorCode
from app.services.exceptions import AuthenticationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


def issue_session_token(user_id: uuid.UUID, email: str) -> str:
    now = _now()
    exp = now + timedelta(days=settings.session_ttl_days)
    payload = {
        "userId": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str | None) -> Identity:
    if not token:
        raise AuthenticationError(ErrorCode.TOKEN_MISSING.value, "No token provided")
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
        user_id, email = claims["userId"], claims["email"]
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise ValueError("userId and email claims must be strings")
        return Identity(user_id=uuid.UUID(user_id), email=email)
    except (PyJWTError, KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError(ErrorCode.TOKEN_INVALID.value, "Invalid or expired token") from exc


def verify_session_token_optional(token: str | None) -> Identity | None:
    try:
        return verify_session_token(token)
    except AuthenticationError:
        return None
