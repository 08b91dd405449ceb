from app.models.base import Base
from app.models.event import Event
from app.models.event_attendee import EventAttendee
from app.models.user import User

__all__ = ["Base", "User", "Event", "EventAttendee"]
