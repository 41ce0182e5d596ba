import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.database import get_db
from app.core.errors import AdminNotFound, TokenInvalid, Unauthorized
from app.core.jwt import TokenIssuer, get_token_issuer
from app.core.security import MAX_PASSWORD_BYTES
from app.models.admin import Admin
from app.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter()
# auto_error off so a missing header gets the same 401 body as a bad token
security = HTTPBearer(auto_error=False)

def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value

class SignupRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    email: EmailStr

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_length(value)

class SignupResponse(BaseModel):
    status: str = "Admin Account successfully created"
    status_code: int = 200
    user_id: int

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_length(value)

class TokenResponse(BaseModel):
    status: str = "Login successful"
    status_code: int = 200
    user_id: str
    access_token: str
    token_type: str = "bearer"

class AdminResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: Session = Depends(get_db),
) -> Admin:
    """
    Resolve the bearer token to an admin.

    Missing, tampered and expired tokens all end in a 401; a valid token whose
    admin no longer exists is treated as invalid too.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing authentication token")

    admin_id = issuer.verify_token(credentials.credentials)

    try:
        admin = CredentialStore(db).get(admin_id)
    except AdminNotFound:
        logger.warning("Token for unknown admin id=%s", admin_id)
        raise TokenInvalid()

    # Picked up by the access log
    request.state.admin_id = admin.id
    return admin

@router.post("/signup", response_model=SignupResponse)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> SignupResponse:
    """Register an admin account"""
    admin = CredentialStore(db).create_admin(
        username=payload.username,
        raw_password=payload.password,
        email=payload.email,
    )
    return SignupResponse(user_id=admin.id)

@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Exchange username/password for a session token valid for one hour.

    Unknown username and wrong password return the same 401.
    """
    admin = CredentialStore(db).authenticate(payload.username, payload.password)
    token = issuer.issue_token(admin.id)
    logger.info("Admin id=%s logged in", admin.id)
    return TokenResponse(user_id=str(admin.id), access_token=token)

@router.get("/me", response_model=AdminResponse)
def get_me(current_admin: Admin = Depends(get_current_admin)):
    return AdminResponse.model_validate(current_admin)
