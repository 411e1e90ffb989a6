"""
Filesystem blob store for resume files.

Files live directly under RESUME_STORAGE_PATH as `<uuid4 hex>.<ext>`. Errors
are logged with the underlying cause and re-raised as FileStorageError, whose
message never includes filesystem paths.
"""
import logging
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from .. import config
from ..utils.error_handlers import FileStorageError, FileUploadError, get_error_message

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


def storage_dir() -> Path:
    return Path(config.RESUME_STORAGE_PATH)


def save_stream(source: BinaryIO, ext: str, max_bytes: int) -> tuple[str, Path, int]:
    """
    Copy `source` to a new uniquely named file, enforcing the size cap while streaming.

    Returns (stored file name, absolute path, size in bytes).
    """
    base_dir = storage_dir()
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to prepare resume storage directory: %s", e)
        raise FileStorageError(get_error_message("storage_failed")) from e

    stored_name = f"{uuid4().hex}.{ext}"
    dest = base_dir / stored_name

    size = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise FileUploadError(get_error_message("file_too_large"), status_code=413)
                out.write(chunk)
    except FileUploadError:
        _discard(dest)
        raise
    except OSError as e:
        _discard(dest)
        logger.error("Failed to write resume file: %s", e)
        raise FileStorageError(get_error_message("storage_failed")) from e

    if size == 0:
        _discard(dest)
        raise FileUploadError(get_error_message("file_empty"))

    return stored_name, dest, size


def open_file(file_path: str) -> Path:
    """Resolve a stored file for download; the file must exist."""
    path = Path(file_path)
    if not path.is_file():
        logger.error("Resume file missing on disk: %s", path.name)
        raise FileStorageError(get_error_message("file_missing"))
    return path


def delete_file(file_path: str | None) -> None:
    """Delete a stored file. A file that is already gone is not an error."""
    if not file_path:
        return
    path = Path(file_path)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error("Failed to delete resume file %s: %s", path.name, e)
        raise FileStorageError(get_error_message("storage_failed")) from e


def _discard(path: Path) -> None:
    # partial upload cleanup; the original error is what gets reported
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove partial upload %s: %s", path.name, e)
