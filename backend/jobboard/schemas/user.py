from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, field_validator

from ..utils.validation import (
    COUNTRY_CODE_PATTERN,
    NAME_PATTERN,
    PHONE_PATTERN,
    USER_TYPES,
    validate_choice,
    validate_email,
    validate_password_strength,
)
from .base import CamelModel

_USER_TYPE_MESSAGE = "User type must be either 'candidate', 'employer', or 'admin'"


def _check_first_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("First name is required")
    if len(v) < 2 or len(v) > 120:
        raise ValueError("First name must be between 2 and 120 characters")
    if not NAME_PATTERN.match(v):
        raise ValueError("First name can only contain letters, spaces, hyphens, and apostrophes")
    return v


def _check_last_name(v: str | None) -> str:
    v = (v or "").strip()
    # empty last name is allowed (single-word names)
    if not v:
        return ""
    if len(v) < 2 or len(v) > 120:
        raise ValueError("Last name must be between 2 and 120 characters")
    if not NAME_PATTERN.match(v):
        raise ValueError("Last name can only contain letters, spaces, hyphens, and apostrophes")
    return v


def _check_phone(v: str | None) -> str | None:
    if not v:
        return None
    if not PHONE_PATTERN.match(v):
        raise ValueError("Phone number must be between 10 and 15 digits")
    return v


def _check_country_code(v: str | None) -> str | None:
    if not v:
        return None
    if not COUNTRY_CODE_PATTERN.match(v):
        raise ValueError("Country code must be a valid format (e.g., +1, +91)")
    return v


FirstName = Annotated[str, AfterValidator(_check_first_name)]
LastName = Annotated[str | None, AfterValidator(_check_last_name)]
PhoneNumber = Annotated[str | None, AfterValidator(_check_phone)]
CountryCode = Annotated[str | None, AfterValidator(_check_country_code)]


class UserOut(CamelModel):
    """Public view of a user; the password hash is never part of it."""

    id: int
    email: str
    first_name: str
    last_name: str = ""
    phone_country_code: str | None = None
    phone_number: str | None = None
    user_type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserCreate(CamelModel):
    first_name: FirstName
    last_name: LastName = ""
    email: str
    password: str
    phone_number: PhoneNumber = None
    phone_country_code: CountryCode = None
    user_type: str = "candidate"

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("user_type")
    @classmethod
    def _check_user_type(cls, v: str) -> str:
        return validate_choice(v, USER_TYPES, _USER_TYPE_MESSAGE)


class UserUpdate(CamelModel):
    """Email is the immutable lookup key and is not accepted here."""

    first_name: FirstName
    last_name: LastName = ""
    phone_number: PhoneNumber = None
    phone_country_code: CountryCode = None
    user_type: str | None = None

    @field_validator("user_type")
    @classmethod
    def _check_user_type(cls, v: str | None) -> str | None:
        return validate_choice(v, USER_TYPES, _USER_TYPE_MESSAGE)
