import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.user import User
from ..schemas.user import UserCreate, UserUpdate
from ..utils.error_handlers import ConflictError, FileStorageError, UserNotFoundError, get_error_message
from ..utils.security import hash_password
from ..utils.validation import normalize_email
from . import file_storage

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UserNotFoundError(user_id=user_id)
    return user


def get_user_by_email(db: Session, email: str) -> User:
    normalized = normalize_email(email)
    user = db.query(User).filter(User.email == normalized).first()
    if user is None:
        raise UserNotFoundError(email=normalized)
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id.asc()).all()


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User).filter(User.email == email).first() is not None


def create_user(db: Session, payload: UserCreate) -> User:
    if _email_taken(db, payload.email):
        raise ConflictError(get_error_message("email_exists"))

    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name or "",
        phone_number=payload.phone_number,
        phone_country_code=payload.phone_country_code,
        user_type=payload.user_type,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(get_error_message("email_exists"))
    db.refresh(user)
    logger.info("Created user id=%s", user.id)
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    user = get_user(db, user_id)
    user.first_name = payload.first_name
    user.last_name = payload.last_name or ""
    user.phone_number = payload.phone_number
    user.phone_country_code = payload.phone_country_code
    if payload.user_type is not None:
        user.user_type = payload.user_type
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """
    Delete a user with their resumes and the resume files.

    Files are removed only after the rows are committed. A file that cannot be
    removed is logged and left behind as an orphan; the rows stay deleted.
    """
    user = get_user(db, user_id)
    paths = [r.file_path for r in user.resumes]

    db.delete(user)
    db.commit()

    for path in paths:
        try:
            file_storage.delete_file(path)
        except FileStorageError:
            logger.warning("Resume file left behind after deleting user id=%s", user_id)
    logger.info("Deleted user id=%s with %d resume(s)", user_id, len(paths))
