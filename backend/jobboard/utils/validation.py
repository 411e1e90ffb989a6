"""
Validation helpers shared by request schemas and services.

Schema-level helpers raise ValueError so pydantic reports them as field errors;
upload helpers raise FileUploadError.
"""
import re

from .error_handlers import FileUploadError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
PHONE_PATTERN = re.compile(r"^[0-9]{10,15}$")
COUNTRY_CODE_PATTERN = re.compile(r"^\+?[1-9]\d{0,3}$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")

USER_TYPES = ("candidate", "employer", "admin")
EXPERIENCE_LEVELS = ("ENTRY", "MID", "SENIOR", "EXECUTIVE")
WORK_MODES = ("REMOTE", "ONSITE", "HYBRID")
EDUCATION_LEVELS = ("HIGH_SCHOOL", "BACHELOR", "MASTER", "PHD")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_email(email: str | None) -> str:
    """Validate email format and return it normalized."""
    if not email or not isinstance(email, str) or not email.strip():
        raise ValueError("Email is required")

    email = normalize_email(email)
    if len(email) > 190:
        raise ValueError("Email must not exceed 190 characters")

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Email must be a valid email address")

    return email


def validate_password_strength(password: str | None) -> str:
    """Registration rule: at least 8 characters with at least one letter."""
    if not password:
        raise ValueError("Password is required")
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[a-zA-Z]", password):
        raise ValueError("Password must contain at least one letter")
    # bcrypt only takes 72 bytes
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password must be 72 bytes or less")
    return password


def validate_choice(value: str | None, choices: tuple[str, ...], message: str) -> str | None:
    if value is None:
        return None
    if value not in choices:
        raise ValueError(message)
    return value


def split_name(full_name: str | None) -> tuple[str, str]:
    """
    Split a full name on the first whitespace run.

    A single-word name yields an empty last name.
    """
    if not full_name or not full_name.strip():
        return "", ""
    parts = full_name.strip().split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent directory traversal and other attacks."""
    if not filename or not filename.strip():
        raise FileUploadError("Invalid filename")

    # Remove any path separators
    filename = filename.replace("/", "_").replace("\\", "_")

    # Remove any null bytes
    filename = filename.replace("\x00", "")

    # Remove directory traversal sequences
    filename = filename.replace("..", "_")

    # Remove leading dots to prevent hidden files
    filename = filename.lstrip(".")

    if len(filename) > 255:
        raise FileUploadError("Original file name must not exceed 255 characters")

    if not filename or filename == "_":
        raise FileUploadError("Invalid filename")

    return filename


def file_extension(filename: str | None) -> str:
    """Extension without the dot, lowercased; empty when there is none."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()
