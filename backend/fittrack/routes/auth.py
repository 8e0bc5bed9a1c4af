"""Authentication routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    TokenValidation,
)
from fittrack.schemas.user import UserWithMetrics
from fittrack.services.auth_service import auth_service, EmailAlreadyRegistered
from fittrack.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and return an access token."""
    try:
        user = await auth_service.register(db, request)
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email",
        )

    return auth_service.create_token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Sign in with email and password."""
    user = await auth_service.authenticate(db, request.email, request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return auth_service.create_token_response(user)


@router.get("/validate", response_model=TokenValidation)
async def validate_token(
    current_user: UserProfile = Depends(get_current_user),
):
    """Check the bearer token and return the profile it belongs to."""
    return TokenValidation(valid=True, user=UserWithMetrics.from_user(current_user))
