import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The caller recovered from a valid session token."""

    user_id: uuid.UUID
    email: str
