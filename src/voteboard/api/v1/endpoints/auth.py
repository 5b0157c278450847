# src/voteboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Voteboard API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from voteboard.api.v1.dependencies import CurrentUserDep, SessionDep
from voteboard.core.errors import ConflictError, ValidationError
from voteboard.core.security import create_access_token
from voteboard.models import User
from voteboard.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from voteboard.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep) -> TokenResponse:
    """Create an account and return a bearer token for it."""
    try:
        user = user_service.register_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": exc.field, "message": exc.message},
        ) from exc
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"field": "email", "message": str(exc)},
        ) from exc
    return TokenResponse(access_token=create_access_token(user.id))


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = user_service.authenticate(db, email=payload.email, password=payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return TokenResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUserDep) -> User:
    """Return the authenticated user."""
    return current_user
