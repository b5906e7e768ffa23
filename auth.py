"""
Authentication routes and dependencies
"""

import re
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Header, Depends, Cookie
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from auth_utils import create_jwt, decode_jwt
from services.auth_service import AuthService
from crud.user import normalize_email
from utils.responses import success_response
from errors import DuplicateEmail, UserNotFound, InvalidCredential, InvalidToken

logger = logging.getLogger(__name__)

# Create auth router
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


# Request models
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


def validate_email(email: str) -> bool:
    """Validate email format"""
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


@auth_router.post("/register")
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a new user account"""
    if not request.name or not request.email or not request.password:
        raise HTTPException(status_code=400, detail="All fields required")

    if not validate_email(request.email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    try:
        user_id = await AuthService(db).register(request.name, request.email, request.password)
    except DuplicateEmail:
        raise HTTPException(status_code=400, detail="Email already exists")

    return success_response(
        data={"user_id": str(user_id)},
        message="✅ User registered successfully",
        status=201
    )


@auth_router.post("/login")
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login and get JWT token"""
    if not request.email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    try:
        user_id = await AuthService(db).verify(request.email, request.password)
    except UserNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    except InvalidCredential:
        raise HTTPException(status_code=401, detail="Invalid password")

    token = create_jwt(str(user_id), normalize_email(request.email))

    return success_response(
        data={"token": token, "user_id": str(user_id)},
        message="✅ Login successful"
    )


# Dependency for protected routes
async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    auth_token: Optional[str] = Cookie(None),
) -> dict:
    """
    Dependency function to get the authenticated user's claims.

    Authentication priority:
    1. Authorization header (Bearer token)
    2. auth_token cookie
    3. Raise 401 if neither is found
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization.replace("Bearer ", "").strip()
    elif auth_token:
        token = auth_token

    if not token:
        raise HTTPException(status_code=401, detail="No token provided")

    try:
        claims = decode_jwt(token)
    except InvalidToken as e:
        raise HTTPException(status_code=401, detail=str(e))

    if not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token payload")

    return {
        "user_id": claims["sub"],
        "email": claims.get("email"),
    }


@auth_router.get("/me")
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    """Return the identity carried by the current token"""
    return success_response(data=current_user)
