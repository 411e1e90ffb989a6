import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.auth import ApiTokenRequest, AuthResponse, LoginRequest, RegisterRequest
from ..services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    return auth_service.register(db, payload.name, payload.email, payload.password)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return auth_service.login(db, payload.email, payload.password)


@router.post("/token", response_model=AuthResponse)
def generate_api_token(payload: ApiTokenRequest):
    """Issue a tooling token in exchange for the server's JWT secret."""
    return auth_service.generate_api_token(payload.secret)
