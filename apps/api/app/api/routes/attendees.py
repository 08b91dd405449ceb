from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.schemas import MessageOut
from app.auth.deps import CurrentIdentity
from app.db import get_db
from app.services import join_event, leave_event

router = APIRouter(prefix="/events/{event_id}", tags=["attendees"])

DBSession = Annotated[Session, Depends(get_db)]


@router.post("/join", response_model=MessageOut, status_code=201)
def join(event_id: str, db: DBSession, identity: CurrentIdentity):
    join_event(db, identity, event_id)
    return MessageOut(message="Joined event successfully")


@router.post("/leave", response_model=MessageOut)
def leave(event_id: str, db: DBSession, identity: CurrentIdentity):
    leave_event(db, identity, event_id)
    return MessageOut(message="Left event successfully")
