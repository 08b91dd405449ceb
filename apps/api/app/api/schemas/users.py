from __future__ import annotations

from datetime import datetime
from uuid import UUID

from app.api.schemas.common import Envelope, MessageOut, SchemaBase


class SignupIn(SchemaBase):
    email: str | None = None
    name: str | None = None
    password: str | None = None


class LoginIn(SchemaBase):
    email: str | None = None
    password: str | None = None


class UserPublicOut(SchemaBase):
    id: UUID
    email: str
    name: str


class UserProfileOut(UserPublicOut):
    created_at: datetime


class AuthOut(MessageOut):
    user: UserPublicOut


class MeOut(Envelope):
    user: UserProfileOut
