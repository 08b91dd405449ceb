from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from app.api.schemas.events import (
    EVENT_FIELDS,
    AttendeeOut,
    EventCreate,
    EventDetailOut,
    EventSummaryOut,
    EventUpdate,
)
from app.api.schemas.users import UserPublicOut
from app.auth.identity import Identity
from app.models import Event, EventAttendee
from app.services.error_codes import ErrorCode
from app.services.exceptions import NotFoundError, ValidationError
from app.services.permissions import require_authenticated, require_creator

logger = structlog.get_logger(__name__)


def _event_not_found() -> NotFoundError:
    return NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "Event not found")


def parse_event_id(event_id: Any) -> uuid.UUID:
    if isinstance(event_id, uuid.UUID):
        return event_id
    try:
        return uuid.UUID(str(event_id))
    except ValueError:
        raise _event_not_found() from None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _base_fields(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "date": event.date,
        "time": event.time,
        "location": event.location,
        "creator_id": event.creator_id,
        "creator": UserPublicOut.model_validate(event.creator),
        "created_at": event.created_at,
        "updated_at": event.updated_at,
    }


def _detail(event: Event, caller_id: uuid.UUID | None) -> EventDetailOut:
    attendees = [AttendeeOut.model_validate(a) for a in event.attendees]
    return EventDetailOut(
        **_base_fields(event),
        attendee_count=len(attendees),
        is_attending=caller_id is not None and any(a.user_id == caller_id for a in attendees),
        attendees=attendees,
    )


def list_events(db: Session, caller_id: uuid.UUID | None = None) -> list[EventSummaryOut]:
    counts = (
        select(EventAttendee.event_id, func.count().label("attendee_count"))
        .group_by(EventAttendee.event_id)
        .subquery()
    )
    rows = db.execute(
        select(Event, func.coalesce(counts.c.attendee_count, 0))
        .outerjoin(counts, counts.c.event_id == Event.id)
        .order_by(Event.date.asc(), Event.created_at.asc())
    ).all()

    attending: set[uuid.UUID] = set()
    if caller_id is not None:
        attending = set(
            db.scalars(select(EventAttendee.event_id).where(EventAttendee.user_id == caller_id))
        )

    return [
        EventSummaryOut(
            **_base_fields(event),
            attendee_count=int(count),
            is_attending=event.id in attending,
        )
        for event, count in rows
    ]


def get_event(db: Session, event_id: Any, caller_id: uuid.UUID | None = None) -> EventDetailOut:
    event = db.scalar(
        select(Event)
        .where(Event.id == parse_event_id(event_id))
        .options(selectinload(Event.attendees))
        .execution_options(populate_existing=True)
    )
    if not event:
        raise _event_not_found()
    return _detail(event, caller_id)


def create_event(db: Session, identity: Identity | None, payload: EventCreate) -> EventDetailOut:
    identity = require_authenticated(identity)

    fields = payload.model_dump(include=set(EVENT_FIELDS))
    if any(_is_blank(fields[name]) for name in EVENT_FIELDS):
        raise ValidationError(ErrorCode.MISSING_FIELDS.value, "Please provide all required fields")

    event = Event(**fields, creator_id=identity.user_id)
    db.add(event)
    try:
        db.commit()
    except IntegrityError as exc:
        # Token outlived its user.
        db.rollback()
        raise NotFoundError(ErrorCode.USER_NOT_FOUND.value, "User not found") from exc

    logger.info("event_created", event_id=str(event.id), user_id=str(identity.user_id))
    return get_event(db, event.id, identity.user_id)


def update_event(
    db: Session,
    identity: Identity | None,
    event_id: Any,
    patch: Any,
) -> EventDetailOut:
    identity = require_authenticated(identity)
    event_uuid = parse_event_id(event_id)

    event = db.get(Event, event_uuid)
    if not event:
        raise _event_not_found()
    require_creator(event, identity.user_id, "update")

    # Authorization first: a non-creator is refused whatever the body holds.
    if patch is None:
        patch = {}
    if not isinstance(patch, (EventUpdate, Mapping)):
        raise ValidationError(ErrorCode.INVALID_INPUT.value, "Invalid event fields")
    if not isinstance(patch, EventUpdate):
        try:
            patch = EventUpdate.model_validate(patch)
        except SchemaValidationError as exc:
            raise ValidationError(ErrorCode.INVALID_INPUT.value, "Invalid event fields") from exc

    # Omitted, null and blank fields all keep their stored value.
    changes = {
        key: value
        for key, value in patch.model_dump(exclude_unset=True).items()
        if key in EVENT_FIELDS and not _is_blank(value)
    }
    for key, value in changes.items():
        setattr(event, key, value)

    try:
        db.commit()
    except StaleDataError:
        # Deleted by a concurrent request between our read and the UPDATE.
        db.rollback()
        raise _event_not_found() from None

    logger.info(
        "event_updated",
        event_id=str(event_uuid),
        user_id=str(identity.user_id),
        fields=sorted(changes),
    )
    return get_event(db, event_uuid, identity.user_id)


def delete_event(db: Session, identity: Identity | None, event_id: Any) -> None:
    identity = require_authenticated(identity)
    event_uuid = parse_event_id(event_id)

    event = db.get(Event, event_uuid)
    if not event:
        raise _event_not_found()
    require_creator(event, identity.user_id, "delete")

    # Attendance rows go in the same transaction as the event.
    db.execute(delete(EventAttendee).where(EventAttendee.event_id == event_uuid))
    result = db.execute(delete(Event).where(Event.id == event_uuid))
    if not result.rowcount:
        db.rollback()
        raise _event_not_found()
    db.commit()

    logger.info("event_deleted", event_id=str(event_uuid), user_id=str(identity.user_id))
