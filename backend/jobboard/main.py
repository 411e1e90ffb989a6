import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import auth as auth_api
from .api import jobs as jobs_api
from .api import resumes as resumes_api
from .api import users as users_api
from .config import FRONTEND_ORIGINS, LOG_LEVEL
from .database import init_db
from .utils.error_handlers import (
    AppError,
    create_error_response,
    field_errors_from_validation,
    get_error_message,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Job Board API")

app.include_router(auth_api.router)
app.include_router(users_api.router)
app.include_router(jobs_api.router)
app.include_router(resumes_api.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """All field violations at once, keyed by field name."""
    return create_error_response(
        400,
        get_error_message("validation_failed"),
        request.url.path,
        errors=field_errors_from_validation(exc.errors()),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return create_error_response(exc.status_code, exc.message, request.url.path, errors=exc.errors or None)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return create_error_response(exc.status_code, str(exc.detail), request.url.path)


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors without leaking driver details."""
    logger.exception("Database error on %s: %s", request.url.path, exc)
    return create_error_response(500, get_error_message("server_error"), request.url.path)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors globally."""
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    return create_error_response(500, get_error_message("server_error"), request.url.path)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend running",
        "service": "Job Board API",
    }


_default_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=[*_default_origins, *FRONTEND_ORIGINS],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("Database ready")
