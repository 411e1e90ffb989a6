"""
Application error taxonomy and the JSON error envelope.

Every error leaving the API has the shape::

    {"status": 404, "message": "...", "timestamp": "...", "path": "/api/v1/...", "errors": {...}}

`errors` is only present for field-level validation failures.
"""
import logging
from datetime import datetime, timezone

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, errors: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Business-rule validation error (single message, no field map)."""
    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(message, status_code=400, errors=errors)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    """Duplicate resource error."""
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, status_code=409)


class AuthenticationError(AppError):
    """Bad credentials, or a missing/invalid bearer token on a protected route."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class AuthorizationError(AppError):
    """Caller is known but not allowed."""
    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message, status_code=403)


class FileUploadError(AppError):
    """Rejected upload (type, emptiness, size)."""
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message, status_code=status_code)


class FileStorageError(AppError):
    """Filesystem read/write/delete failure. The message never carries paths."""
    def __init__(self, message: str = "File storage operation failed"):
        super().__init__(message, status_code=500)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int | None = None, email: str | None = None):
        if email is not None:
            super().__init__(f"User not found with email: {email}")
        else:
            super().__init__(f"User not found with id: {user_id}")
        self.user_id = user_id
        self.email = email


class JobNotFoundError(NotFoundError):
    def __init__(self, job_id: int):
        super().__init__(f"Job not found with id: {job_id}")
        self.job_id = job_id


class ResumeNotFoundError(NotFoundError):
    def __init__(self, message: str = "Resume not found"):
        super().__init__(message)


# User-facing messages
ERROR_MESSAGES = {
    "invalid_credentials": "Invalid email or password",
    "email_exists": "Email already registered. Please sign in instead.",
    "auth_required": "Authentication required",
    "invalid_secret": "Invalid secret. The provided secret does not match the configured JWT secret",
    "validation_failed": "Validation failed for one or more fields",
    "salary_order": "Minimum salary must be less than maximum salary",
    "salary_currency": "Currency must be specified when salary range is provided",
    "file_empty": "File is empty",
    "file_too_large": "File size exceeds maximum allowed size",
    "invalid_file_type": "File type not allowed",
    "file_missing": "File not found on disk",
    "storage_failed": "File storage operation failed",
    "server_error": "An unexpected error occurred. Please try again later.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-facing error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    path: str,
    errors: dict | None = None,
) -> JSONResponse:
    """Create the standardized error envelope."""
    content = {
        "status": status_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": path,
    }

    if errors:
        content["errors"] = errors

    return JSONResponse(
        status_code=status_code,
        content=content,
    )


def field_errors_from_validation(errors: list[dict]) -> dict[str, str]:
    """
    Flatten pydantic/FastAPI validation errors into a field -> message map.

    The first violation per field wins; `body`/`query`/`path` prefixes are dropped.
    """
    out: dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in (err.get("loc") or ()) if part not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        msg = str(err.get("msg") or "Invalid value")
        # pydantic prefixes custom validator messages
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(field, msg)
    return out
