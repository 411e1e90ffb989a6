import os
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Unit tests import backend.jobboard directly; keep them off any developer .env
# and away from the default database and upload locations.
_SCRATCH = Path(tempfile.mkdtemp(prefix="jobboard-unit-"))
os.environ["DISABLE_DOTENV"] = "1"
os.environ.setdefault("DATABASE_URL", f"sqlite+pysqlite:///{(_SCRATCH / 'unit.sqlite3').as_posix()}")
os.environ.setdefault("RESUME_STORAGE_PATH", str(_SCRATCH / "resumes"))
os.environ.setdefault("JWT_SECRET", "test-secret-for-jobboard-at-least-32-bytes")
os.environ.setdefault("BCRYPT_ROUNDS", "4")


@pytest.fixture()
def db_session(tmp_path: Path):
    """Session on a fresh SQLite file with every table created."""
    from backend.jobboard import database as db
    from backend.jobboard import models  # noqa: F401

    engine = create_engine(
        f"sqlite+pysqlite:///{(tmp_path / 'unit.sqlite3').as_posix()}",
        connect_args={"check_same_thread": False},
    )
    db.Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
