from __future__ import annotations

import datetime as dt
from uuid import UUID

from app.api.schemas.common import Envelope, MessageOut, SchemaBase
from app.api.schemas.users import UserPublicOut

EVENT_FIELDS = ("title", "description", "date", "time", "location")


class EventCreate(SchemaBase):
    # Presence is checked by the service so a missing field is a 400, not a schema error.
    title: str | None = None
    description: str | None = None
    date: dt.date | None = None
    time: str | None = None
    location: str | None = None


class EventUpdate(SchemaBase):
    title: str | None = None
    description: str | None = None
    date: dt.date | None = None
    time: str | None = None
    location: str | None = None


class AttendeeOut(SchemaBase):
    id: UUID
    user_id: UUID
    event_id: UUID
    joined_at: dt.datetime
    user: UserPublicOut


class EventSummaryOut(SchemaBase):
    id: UUID
    title: str
    description: str
    date: dt.date
    time: str
    location: str
    creator_id: UUID
    creator: UserPublicOut
    created_at: dt.datetime
    updated_at: dt.datetime
    attendee_count: int
    is_attending: bool


class EventDetailOut(EventSummaryOut):
    attendees: list[AttendeeOut]


class EventListOut(Envelope):
    events: list[EventSummaryOut]


class EventOut(Envelope):
    event: EventDetailOut


class EventSavedOut(MessageOut):
    event: EventDetailOut
