import os
from pathlib import Path
from dotenv import load_dotenv

# Override=True so edits to backend/.env take effect on reload.
#
# Tests point DATABASE_URL / RESUME_STORAGE_PATH at temp locations; set
# DISABLE_DOTENV=1 so a developer .env cannot override them.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Local SQLite by default so the backend boots out-of-the-box.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "jobboard.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"

# -------------------- Auth / JWT --------------------
# NOTE: keep a default for local dev so the server can boot even if JWT_SECRET isn't set.
JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me_please_32_bytes_min")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440") or "1440")
# bcrypt cost factor; tests drop this to 4.
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12") or "12")

# -------------------- Resume storage --------------------
RESUME_STORAGE_PATH = os.getenv("RESUME_STORAGE_PATH") or (
    Path(__file__).resolve().parent.parent / "uploads" / "resumes"
).as_posix()
RESUME_ALLOWED_TYPES = os.getenv("RESUME_ALLOWED_TYPES", "pdf,doc,docx")
RESUME_MAX_FILE_SIZE = int(os.getenv("RESUME_MAX_FILE_SIZE", "10485760") or "10485760")  # 10MB

# -------------------- HTTP --------------------
FRONTEND_ORIGINS = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "").split(",")
    if origin.strip()
]
LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()


def allowed_resume_extensions() -> set[str]:
    return {ext.strip().lower().lstrip(".") for ext in RESUME_ALLOWED_TYPES.split(",") if ext.strip()}
