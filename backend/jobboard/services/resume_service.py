import logging
from pathlib import Path

from fastapi import UploadFile
from sqlalchemy import case
from sqlalchemy.orm import Session

from .. import config
from ..models.resume import Resume
from ..utils.error_handlers import (
    FileStorageError,
    FileUploadError,
    ResumeNotFoundError,
    ValidationError,
    get_error_message,
)
from ..utils.validation import file_extension, sanitize_filename
from . import file_storage
from .user_service import get_user

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
MAX_DESCRIPTION_LENGTH = 500


def upload_resume(db: Session, user_id: int, upload: UploadFile | None, description: str | None = None) -> Resume:
    user = get_user(db, user_id)

    if upload is None or not upload.filename:
        raise FileUploadError("Invalid filename")

    original_file_name = sanitize_filename(Path(upload.filename).name)
    ext = file_extension(original_file_name)
    allowed = config.allowed_resume_extensions()
    if ext not in allowed or ext not in CONTENT_TYPES:
        raise FileUploadError(
            f"{get_error_message('invalid_file_type')}. Allowed types: {', '.join(sorted(allowed))}"
        )

    if description is not None:
        description = description.strip() or None
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError("Description must not exceed 500 characters")

    stored_name, dest, size = file_storage.save_stream(upload.file, ext, config.RESUME_MAX_FILE_SIZE)

    resume = Resume(
        file_name=stored_name,
        file_type=CONTENT_TYPES[ext],
        file_size=size,
        file_path=dest.as_posix(),
        original_file_name=original_file_name,
        description=description,
        is_primary=False,
        user_id=user.id,
    )
    try:
        db.add(resume)
        db.commit()
    except Exception:
        db.rollback()
        file_storage.delete_file(dest.as_posix())
        raise
    db.refresh(resume)

    logger.info("Stored resume id=%s for user id=%s (%d bytes)", resume.id, user.id, size)
    return resume


def list_resumes(db: Session, user_id: int) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .all()
    )


def _get_owned(db: Session, user_id: int, resume_id: int) -> Resume:
    resume = db.query(Resume).filter(Resume.id == resume_id, Resume.user_id == user_id).first()
    if resume is None:
        raise ResumeNotFoundError("Resume not found for user")
    return resume


def get_primary_resume(db: Session, user_id: int) -> Resume:
    resume = (
        db.query(Resume)
        .filter(Resume.user_id == user_id, Resume.is_primary.is_(True))
        .first()
    )
    if resume is None:
        raise ResumeNotFoundError("No primary resume found for user")
    return resume


def set_primary_resume(db: Session, user_id: int, resume_id: int) -> Resume:
    """
    Make `resume_id` the user's only primary resume.

    A single UPDATE flips every row of the user at once, so no interleaving
    can leave zero or two primaries.
    """
    _get_owned(db, user_id, resume_id)

    db.query(Resume).filter(Resume.user_id == user_id).update(
        {Resume.is_primary: case((Resume.id == resume_id, True), else_=False)},
        synchronize_session=False,
    )
    db.commit()
    db.expire_all()
    return _get_owned(db, user_id, resume_id)


def get_resume_file(db: Session, user_id: int, resume_id: int) -> tuple[Resume, Path]:
    resume = _get_owned(db, user_id, resume_id)
    return resume, file_storage.open_file(resume.file_path)


def delete_resume(db: Session, user_id: int, resume_id: int) -> None:
    resume = _get_owned(db, user_id, resume_id)
    path = resume.file_path
    db.delete(resume)
    db.commit()
    try:
        file_storage.delete_file(path)
    except FileStorageError:
        logger.warning("Resume file left behind after deleting resume id=%s", resume_id)
    logger.info("Deleted resume id=%s for user id=%s", resume_id, user_id)
