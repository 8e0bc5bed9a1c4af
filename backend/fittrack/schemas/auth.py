"""Authentication schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from fittrack.models.user import Gender, ActivityLevel, GoalType
from fittrack.schemas.user import UserWithMetrics


class RegisterRequest(BaseModel):
    """New account with the body metrics the formulas need."""
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    gender: Gender
    age: int = Field(..., ge=13, le=120)
    weight_kg: float = Field(..., ge=20, le=300)
    height_cm: float = Field(..., ge=100, le=250)
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    goal: GoalType = GoalType.MAINTAIN_WEIGHT
    target_weight_kg: Optional[float] = Field(None, ge=20, le=300)


class LoginRequest(BaseModel):
    """Email and password sign in."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserWithMetrics


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: str  # user_id
    email: str
    exp: datetime
    iat: datetime
    type: str


class TokenValidation(BaseModel):
    valid: bool
    user: UserWithMetrics
