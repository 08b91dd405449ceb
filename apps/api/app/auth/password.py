from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher()

# Checked against when the email is unknown so both login failures cost one hash.
_DUMMY_HASH = _hasher.hash("gatherly-dummy-password")


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("password is required")
    try:
        return _hasher.hash(plain)
    except HashingError as exc:
        raise ValueError("failed to hash password") from exc


def verify_password(plain: str, hashed: str | None) -> bool:
    if not plain:
        return False
    try:
        _hasher.verify(hashed or _DUMMY_HASH, plain)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
    return hashed is not None
