from app.api.schemas.common import Envelope, MessageOut, SchemaBase
from app.api.schemas.events import (
    AttendeeOut,
    EventCreate,
    EventDetailOut,
    EventListOut,
    EventOut,
    EventSavedOut,
    EventSummaryOut,
    EventUpdate,
)
from app.api.schemas.users import AuthOut, LoginIn, MeOut, SignupIn, UserProfileOut, UserPublicOut

__all__ = [
    "SchemaBase",
    "Envelope",
    "MessageOut",
    "EventCreate",
    "EventUpdate",
    "AttendeeOut",
    "EventSummaryOut",
    "EventDetailOut",
    "EventListOut",
    "EventOut",
    "EventSavedOut",
    "SignupIn",
    "LoginIn",
    "UserPublicOut",
    "UserProfileOut",
    "AuthOut",
    "MeOut",
]
