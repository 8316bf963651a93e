"""Auth Routes — registration, login and the current user's profile.

Invariants:
    - register/login return {token, user}; the token is the only credential issued
    - Login failures never reveal whether the username exists
    - PUT /me only changes display_name and avatar_url
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.api.deps import get_current_user
from crowdfund.config import get_settings
from crowdfund.core.errors import AuthenticationError, ConflictError
from crowdfund.infrastructure.database import get_db
from crowdfund.models.user import User
from crowdfund.schemas.auth import (
    AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserResponse,
)
from crowdfund.services.auth_tokens import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an account and sign the caller in."""
    settings = get_settings()
    result = await db.execute(
        select(User).where(
            or_(User.username == body.username, User.email == body.email),
        ),
    )
    existing = result.scalars().first()
    if existing:
        field = "username" if existing.username == body.username else "email"
        raise ConflictError(f"{field.capitalize()} already taken", field)

    user = User(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password, settings.bcrypt_rounds),
        display_name=(body.display_name or "").strip() or body.username,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Username or email already taken", "username")
    await db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return AuthResponse(
        token=issue_token(user.id, settings),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange username/password for a bearer token."""
    result = await db.execute(
        select(User).where(User.username == body.username.strip()),
    )
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.password_hash):
        raise AuthenticationError("Invalid username or password")
    return AuthResponse(
        token=issue_token(user.id, get_settings()),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=UserResponse)
async def update_me(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update display name and/or avatar."""
    updates = body.model_dump(exclude_unset=True)
    if updates.get("display_name") is not None:
        user.display_name = updates["display_name"].strip() or user.display_name
    if "avatar_url" in updates:
        user.avatar_url = updates["avatar_url"]
    await db.commit()
    await db.refresh(user)
    return user
