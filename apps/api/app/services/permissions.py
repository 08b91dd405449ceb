from __future__ import annotations

import uuid

from app.auth.identity import Identity
from app.models import Event
from app.services.error_codes import ErrorCode
from app.services.exceptions import AuthenticationError, PermissionDeniedError


def require_authenticated(identity: Identity | None) -> Identity:
    if identity is None:
        raise AuthenticationError(ErrorCode.NOT_AUTHENTICATED.value, "Not authenticated")
    return identity


def require_creator(event: Event, caller_id: uuid.UUID, action: str = "modify") -> None:
    if event.creator_id != caller_id:
        raise PermissionDeniedError(
            ErrorCode.NOT_EVENT_CREATOR.value, f"Only creator can {action} this event"
        )
