"""Current-user dependency for protected routes."""
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.services.auth_service import auth_service

logger = logging.getLogger(__name__)

# Missing credentials become a 401 in get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    """
    Resolve the bearer access token to an active user profile.

    Raises:
        HTTPException: 401 for a missing, invalid or orphaned token,
            403 for a disabled account
    """
    if not credentials:
        raise _unauthorized("Authentication required")

    payload = auth_service.verify_token(credentials.credentials, expected_type="access")
    if not payload:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = UUID(payload.sub)
    except ValueError:
        logger.warning(f"Token subject is not a user id: {payload.sub!r}")
        raise _unauthorized("Invalid or expired token") from None

    user = await db.get(UserProfile, user_id)
    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user
