"""User and profile routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.base import get_db
from fittrack.models.user import UserProfile
from fittrack.schemas.user import (
    UserUpdate,
    UserWithMetrics,
    UserMetrics,
    PasswordChange,
)
from fittrack.services.auth_service import auth_service
from fittrack.services.metrics import BodyProfile, bmi_category
from fittrack.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["User"])


@router.get("/profile", response_model=UserWithMetrics)
async def get_profile(
    current_user: UserProfile = Depends(get_current_user),
):
    """Get the current user's profile."""
    return UserWithMetrics.from_user(current_user)


@router.put("/profile", response_model=UserWithMetrics)
async def update_profile(
    updates: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Update the current user's profile."""
    update_data = updates.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(current_user, field, value)

    await db.flush()
    await db.refresh(current_user)
    logger.info(f"Updated profile {current_user.id}: {sorted(update_data)}")

    return UserWithMetrics.from_user(current_user)


@router.put("/password")
async def change_password(
    request: PasswordChange,
    db: AsyncSession = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
):
    """Change the password after checking the current one."""
    if not auth_service.verify_password(request.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    current_user.password_hash = auth_service.hash_password(request.new_password)
    await db.flush()
    logger.info(f"Password changed for {current_user.id}")

    return {"message": "Password updated successfully"}


@router.get("/metrics", response_model=UserMetrics)
async def get_metrics(
    current_user: UserProfile = Depends(get_current_user),
):
    """BMI, BMR and daily calorie needs for the current profile."""
    profile = BodyProfile.from_user(current_user)
    return UserMetrics(
        bmi=profile.bmi,
        bmi_category=bmi_category(profile.bmi),
        bmr=profile.bmr,
        daily_calories=profile.daily_calorie_need,
        weight_kg=profile.weight_kg,
        height_cm=profile.height_cm,
        target_weight_kg=profile.target_weight_kg,
    )
