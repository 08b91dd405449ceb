from app.services.events_service import (
    create_event,
    delete_event,
    get_event,
    list_events,
    update_event,
)
from app.services.rsvp_service import join_event, leave_event
from app.services.users_service import authenticate, create_user, get_user

__all__ = [
    "create_user",
    "authenticate",
    "get_user",
    "list_events",
    "get_event",
    "create_event",
    "update_event",
    "delete_event",
    "join_event",
    "leave_event",
]
