from enum import Enum


class ErrorCode(str, Enum):
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_EMAIL = "INVALID_EMAIL"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    NOT_EVENT_CREATOR = "NOT_EVENT_CREATOR"
    RSVP_ALREADY_EXISTS = "RSVP_ALREADY_EXISTS"
    RSVP_NOT_FOUND = "RSVP_NOT_FOUND"
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
