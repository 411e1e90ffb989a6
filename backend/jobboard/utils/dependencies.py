"""
Request authentication in two stages.

`resolve_auth_context` decodes the bearer token into an `AuthContext` and never
fails the request. `require_auth` is the route guard: it turns a missing
context on a protected route into a 401. Routers attach the guard as a
dependency; handlers that need the caller take the context as a parameter.
"""
import logging
from dataclasses import dataclass

from fastapi import Depends, Request

from .error_handlers import AuthenticationError, get_error_message
from .jwt import USER_ID_CLAIM, USER_TYPE_CLAIM, decode_token

logger = logging.getLogger(__name__)

PUBLIC_PREFIXES = ("/api/auth/", "/docs", "/redoc", "/openapi.json", "/health")
PUBLIC_JOB_READ_PATH = "/api/v1/job"


@dataclass(frozen=True)
class AuthContext:
    subject: str
    user_id: int | None
    user_type: str | None
    role: str


def is_public_route(method: str, path: str) -> bool:
    if path == "/api/auth" or any(path == p or path.startswith(p) for p in PUBLIC_PREFIXES):
        return True
    if (method or "").upper() == "GET":
        return path == PUBLIC_JOB_READ_PATH or path.startswith(PUBLIC_JOB_READ_PATH + "/")
    return False


def role_for(user_type: str | None) -> str:
    if not user_type:
        return "ROLE_USER"
    return "ROLE_" + str(user_type).upper()


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_auth_context(request: Request) -> AuthContext | None:
    """Decode stage: the caller's identity, or None. Never raises."""
    if is_public_route(request.method, request.url.path):
        return None

    token = _bearer_token(request)
    if token is None:
        return None

    claims = decode_token(token)
    if claims is None:
        logger.warning("Rejected bearer token on %s %s", request.method, request.url.path)
        return None

    subject = claims.get("sub")
    if not subject:
        return None

    raw_user_id = claims.get(USER_ID_CLAIM)
    try:
        user_id = int(raw_user_id) if raw_user_id is not None else None
    except (TypeError, ValueError):
        user_id = None

    user_type = claims.get(USER_TYPE_CLAIM)
    user_type = str(user_type) if user_type is not None else None

    return AuthContext(
        subject=str(subject),
        user_id=user_id,
        user_type=user_type,
        role=role_for(user_type),
    )


def require_auth(context: AuthContext | None = Depends(resolve_auth_context)) -> AuthContext:
    """Route guard for protected routes."""
    if context is None:
        raise AuthenticationError(get_error_message("auth_required"))
    return context
