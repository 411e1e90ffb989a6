import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.jobboard...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before anything imports backend.jobboard.config.
_SCRATCH = Path(tempfile.mkdtemp(prefix="jobboard-tests-"))
os.environ["DISABLE_DOTENV"] = "1"
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{(_SCRATCH / 'import.sqlite3').as_posix()}"
os.environ["RESUME_STORAGE_PATH"] = str(_SCRATCH / "resumes")
os.environ["JWT_SECRET"] = "test-secret-for-jobboard-at-least-32-bytes"
# Keep hashing fast.
os.environ["BCRYPT_ROUNDS"] = "4"


@pytest.fixture()
def engine(tmp_path: Path):
    from backend.jobboard import database as db
    from backend.jobboard import models  # noqa: F401

    test_engine = create_engine(
        f"sqlite+pysqlite:///{(tmp_path / 'test.sqlite3').as_posix()}",
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()

    db.Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def storage_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from backend.jobboard import config

    path = tmp_path / "resumes"
    monkeypatch.setattr(config, "RESUME_STORAGE_PATH", str(path))
    return path


@pytest.fixture()
def app(engine, storage_dir: Path) -> FastAPI:
    """
    The real application, with `get_db` pointed at a per-test SQLite file.
    """
    from backend.jobboard.database import get_db
    from backend.jobboard.main import app as fastapi_app

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_test_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = _get_test_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    # Unhandled errors must come back as the 500 envelope, not re-raise in the test.
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def db_session(engine):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()
