from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.schemas import EventCreate, EventListOut, EventOut, EventSavedOut, MessageOut
from app.auth.deps import CurrentIdentity, OptionalIdentity
from app.db import get_db
from app.services import create_event, delete_event, get_event, list_events, update_event

router = APIRouter(prefix="/events", tags=["events"])

DBSession = Annotated[Session, Depends(get_db)]


async def raw_json_body(request: Request) -> Any:
    if not await request.body():
        return None
    try:
        return await request.json()
    except ValueError:
        # Unparseable bodies are rejected after the creator check.
        return await request.body()


@router.get("", response_model=EventListOut)
def list_all(db: DBSession, identity: OptionalIdentity):
    caller_id = identity.user_id if identity else None
    return EventListOut(events=list_events(db, caller_id))


@router.get("/{event_id}", response_model=EventOut)
def get_one(event_id: str, db: DBSession, identity: OptionalIdentity):
    caller_id = identity.user_id if identity else None
    return EventOut(event=get_event(db, event_id, caller_id))


@router.post("", response_model=EventSavedOut, status_code=201)
def create(payload: EventCreate, db: DBSession, identity: CurrentIdentity):
    event = create_event(db, identity, payload)
    return EventSavedOut(message="Event created successfully", event=event)


@router.put("/{event_id}", response_model=EventSavedOut)
def update(
    event_id: str,
    db: DBSession,
    identity: CurrentIdentity,
    # Validated by the service after the creator check.
    payload: Annotated[Any, Depends(raw_json_body)],
):
    event = update_event(db, identity, event_id, payload)
    return EventSavedOut(message="Event updated successfully", event=event)


@router.delete("/{event_id}", response_model=MessageOut)
def delete(event_id: str, db: DBSession, identity: CurrentIdentity):
    delete_event(db, identity, event_id)
    return MessageOut(message="Event deleted successfully")
