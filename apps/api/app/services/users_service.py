from __future__ import annotations

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.password import hash_password, verify_password
from app.models import User
from app.services.error_codes import ErrorCode
from app.services.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def _email_taken() -> ConflictError:
    return ConflictError(ErrorCode.EMAIL_TAKEN.value, "User already exists")


def create_user(db: Session, email: str | None, name: str | None, password: str | None) -> User:
    email = (email or "").strip()
    name = (name or "").strip()
    if not email or not name or not password:
        raise ValidationError(ErrorCode.MISSING_FIELDS.value, "Please provide all required fields")
    if "@" not in email:
        raise ValidationError(ErrorCode.INVALID_EMAIL.value, "Please provide a valid email")

    if db.scalar(select(User.id).where(User.email == email)):
        raise _email_taken()

    user = User(email=email, name=name, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise _email_taken() from exc

    logger.info("user_signed_up", user_id=str(user.id))
    return user


def authenticate(db: Session, email: str | None, password: str | None) -> User:
    email = (email or "").strip()
    if not email or not password:
        raise ValidationError(ErrorCode.MISSING_FIELDS.value, "Please provide email and password")

    user = db.scalar(select(User).where(User.email == email))
    # Same message and same hashing cost whether the email or the password was wrong.
    if not verify_password(password, user.password_hash if user else None):
        logger.info("login_failed")
        raise AuthenticationError(ErrorCode.INVALID_CREDENTIALS.value, "Invalid credentials")

    logger.info("user_logged_in", user_id=str(user.id))
    return user


def get_user(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError(ErrorCode.USER_NOT_FOUND.value, "User not found")
    return user
