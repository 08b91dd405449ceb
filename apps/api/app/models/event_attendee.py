from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UUIDPrimaryKeyMixin, utcnow

if TYPE_CHECKING:
    from app.models.event import Event
    from app.models.user import User


class EventAttendee(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "event_attendees"
    # Duplicate joins are rejected here, not by a read-then-insert.
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_event_attendee_user_event"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    user: Mapped[User] = relationship(lazy="joined")
    event: Mapped[Event] = relationship(back_populates="attendees")
