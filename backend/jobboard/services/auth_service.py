import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.user import User
from ..schemas.auth import AuthResponse
from ..schemas.user import UserOut
from ..utils.error_handlers import AuthenticationError, ConflictError, get_error_message
from ..utils.jwt import create_token_from_secret, create_user_token
from ..utils.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from ..utils.validation import normalize_email, split_name

logger = logging.getLogger(__name__)


def _auth_response(user: User, message: str) -> AuthResponse:
    token = create_user_token(user.email, user.id, user.user_type)
    return AuthResponse(token=token, user=UserOut.model_validate(user), message=message)


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User).filter(User.email == email).first() is not None


def register(db: Session, name: str, email: str, password: str) -> AuthResponse:
    email = normalize_email(email)
    if _email_taken(db, email):
        raise ConflictError(get_error_message("email_exists"))

    first_name, last_name = split_name(name)
    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        user_type="candidate",
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent registration won the unique email constraint
        db.rollback()
        raise ConflictError(get_error_message("email_exists"))
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return _auth_response(user, "User registered successfully")


def login(db: Session, email: str, password: str) -> AuthResponse:
    """
    Same status and message whether the email is unknown or the password is wrong.

    The unknown-email path still runs one bcrypt check against a dummy hash.
    """
    email = normalize_email(email)
    user = db.query(User).filter(User.email == email).first()

    if user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Login failed: unknown account")
        raise AuthenticationError(get_error_message("invalid_credentials"))

    if not verify_password(password, user.password_hash):
        logger.info("Login failed for user id=%s", user.id)
        raise AuthenticationError(get_error_message("invalid_credentials"))

    logger.info("User id=%s logged in", user.id)
    return _auth_response(user, "Login successful")


def generate_api_token(secret: str | None) -> AuthResponse:
    token = create_token_from_secret(secret)
    logger.info("Issued API token from secret")
    return AuthResponse(token=token, user=None, message="Token generated successfully")
