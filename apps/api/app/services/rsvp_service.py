from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.identity import Identity
from app.models import Event, EventAttendee
from app.services.error_codes import ErrorCode
from app.services.events_service import parse_event_id
from app.services.exceptions import ConflictError, NotFoundError
from app.services.permissions import require_authenticated

logger = structlog.get_logger(__name__)


def _event_exists(db: Session, event_id: Any) -> bool:
    return db.scalar(select(Event.id).where(Event.id == event_id)) is not None


def join_event(db: Session, identity: Identity | None, event_id: Any) -> EventAttendee:
    identity = require_authenticated(identity)
    event_uuid = parse_event_id(event_id)

    if not _event_exists(db, event_uuid):
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "Event not found")

    # No read-before-insert: the (user_id, event_id) unique constraint decides
    # which of two racing joins wins.
    attendee = EventAttendee(user_id=identity.user_id, event_id=event_uuid)
    db.add(attendee)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _event_exists(db, event_uuid):
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "Event not found") from exc
        raise ConflictError(
            ErrorCode.RSVP_ALREADY_EXISTS.value, "You already joined this event"
        ) from exc

    logger.info("event_joined", event_id=str(event_uuid), user_id=str(identity.user_id))
    return attendee


def leave_event(db: Session, identity: Identity | None, event_id: Any) -> None:
    identity = require_authenticated(identity)
    event_uuid = parse_event_id(event_id)

    result = db.execute(
        delete(EventAttendee).where(
            EventAttendee.user_id == identity.user_id,
            EventAttendee.event_id == event_uuid,
        )
    )
    if not result.rowcount:
        db.rollback()
        raise NotFoundError(ErrorCode.RSVP_NOT_FOUND.value, "You are not attending this event")
    db.commit()

    logger.info("event_left", event_id=str(event_uuid), user_id=str(identity.user_id))
