from pydantic import Field, field_validator

from ..utils.validation import NAME_PATTERN, validate_email, validate_password_strength
from .base import CamelModel
from .user import UserOut


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name is required")
        if len(v) < 2 or len(v) > 240:
            raise ValueError("Name must be between 2 and 240 characters")
        if not NAME_PATTERN.match(v):
            raise ValueError("Name can only contain letters, spaces, hyphens, and apostrophes")
        return v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        return validate_password_strength(v)


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class ApiTokenRequest(CamelModel):
    secret: str | None = Field(default=None, validate_default=True)

    @field_validator("secret")
    @classmethod
    def _check_secret(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("Secret is required")
        return v


class AuthResponse(CamelModel):
    token: str
    user: UserOut | None = None
    message: str
