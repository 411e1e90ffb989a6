"""Repo-root Uvicorn entrypoint.

Allows running the backend from the repo root:

    uvicorn app.main:app --reload

This simply re-exports the FastAPI app defined in `backend/jobboard/main.py`.
"""

from backend.jobboard.main import app  # re-export
