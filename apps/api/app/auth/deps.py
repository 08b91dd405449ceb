from __future__ import annotations

from typing import Annotated

from fastapi import Cookie, Depends

from app.auth.identity import Identity
from app.auth.jwt import verify_session_token, verify_session_token_optional
from app.core.config import settings

SessionCookie = Annotated[str | None, Cookie(alias=settings.session_cookie_name)]


def get_optional_identity(token: SessionCookie = None) -> Identity | None:
    return verify_session_token_optional(token)


def get_current_identity(token: SessionCookie = None) -> Identity:
    return verify_session_token(token)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
