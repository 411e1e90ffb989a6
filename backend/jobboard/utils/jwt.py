"""
Bearer token issuance and validation (HS256 JWT).

Decode helpers never raise: malformed, forged and expired tokens all come
back as False/None, and callers cannot tell those cases apart. Tokens are
stateless and are not revoked server-side; they stay valid until `exp`.
"""
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from .. import config
from .error_handlers import AuthorizationError, ValidationError, get_error_message

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
API_TOKEN_SUBJECT = "api"
USER_ID_CLAIM = "userId"
USER_TYPE_CLAIM = "userType"


def create_access_token(
    subject: str,
    claims: dict | None = None,
    ttl: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    lifetime = ttl if ttl is not None else timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = dict(claims or {})
    to_encode.update({"sub": subject, "iat": issued_at, "exp": issued_at + lifetime})
    return jwt.encode(to_encode, config.JWT_SECRET, algorithm=ALGORITHM)


def create_user_token(email: str, user_id: int, user_type: str | None) -> str:
    return create_access_token(email, {USER_ID_CLAIM: user_id, USER_TYPE_CLAIM: user_type})


def create_token_from_secret(provided_secret: str | None) -> str:
    """Out-of-band tooling token: no identity claims, subject is the literal `api`."""
    if provided_secret is None or not provided_secret.strip():
        raise ValidationError("Secret is required")
    if not config.JWT_SECRET:
        raise AuthorizationError("JWT secret configuration is missing")

    if not hmac.compare_digest(provided_secret.strip().encode("utf-8"), config.JWT_SECRET.encode("utf-8")):
        logger.warning("API token requested with an invalid secret")
        raise AuthorizationError(get_error_message("invalid_secret"))

    return create_access_token(API_TOKEN_SUBJECT)


def decode_token(token: str | None) -> dict[str, Any] | None:
    """Verified claims, or None when the token is malformed, forged or expired."""
    if not token or not isinstance(token, str):
        return None
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug("Token rejected: %s", e)
        return None


def validate_token(token: str | None) -> bool:
    return decode_token(token) is not None


def extract_subject(token: str | None) -> str | None:
    claims = decode_token(token)
    if claims is None:
        return None
    return claims.get("sub")


def extract_claim(token: str | None, key: str) -> Any:
    claims = decode_token(token)
    if claims is None:
        return None
    return claims.get(key)


def extract_user_type(token: str | None) -> str | None:
    user_type = extract_claim(token, USER_TYPE_CLAIM)
    return str(user_type) if user_type is not None else None
