"""Registration and login routes."""

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import create_access_token, hash_password, verify_password
from ...models import User, UserRole
from ...schemas.auth import LoginRequest, RegisterRequest
from ..dependencies import get_session
from ..errors import APIError, ErrorKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", status_code=201, response_model=Dict)
def register(payload: RegisterRequest, session: Session = Depends(get_session)):
    """Create a user account with the 'user' role."""
    if not payload.username or not payload.email or not payload.password:
        raise APIError(ErrorKind.VALIDATION_ERROR, "All fields are required")
    if '@' not in payload.email:
        raise APIError(ErrorKind.VALIDATION_ERROR, "A valid email address is required")

    if session.query(User.user_id).filter(User.username == payload.username).first():
        raise APIError(ErrorKind.CONFLICT, "Username already taken")
    if session.query(User.user_id).filter(User.email == payload.email).first():
        raise APIError(ErrorKind.CONFLICT, "Email already registered")

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=UserRole.USER.value,
    )
    session.add(user)
    session.flush()
    logger.info(f"Registered user {user.user_id} ({user.username})")
    return {
        "message": "User registered successfully",
        "user_id": user.user_id,
        "role": user.role,
    }

@router.post("/login", response_model=Dict)
def login(payload: LoginRequest, session: Session = Depends(get_session)):
    """Exchange username and password for a bearer token."""
    if not payload.username or not payload.password:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Username and password are required")

    user = session.query(User).filter(User.username == payload.username).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise APIError(ErrorKind.UNAUTHORIZED, "Invalid credentials")

    token = create_access_token(user.user_id, user.username, user.role)
    return {
        "message": "Login successful",
        "token": token,
        "username": user.username,
        "role": user.role,
    }
