"""Authentication service for passwords and JWT access tokens."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.config import get_settings
from fittrack.models.user import UserProfile
from fittrack.schemas.auth import RegisterRequest, TokenResponse, TokenPayload
from fittrack.schemas.user import UserWithMetrics

logger = logging.getLogger(__name__)
settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class EmailAlreadyRegistered(Exception):
    """Registration with an email that already has an account."""


class AuthService:
    """Service for handling authentication."""

    def __init__(self):
        """Initialize auth service."""
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_token_expire = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        return pwd_context.verify(password, password_hash)

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            user_id: User's UUID
            email: User's email
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token
        """
        issued = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": issued + (expires_delta or self.access_token_expire),
            "iat": issued,
            "type": "access",
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_token_response(self, user: UserProfile) -> TokenResponse:
        """Issue an access token for the user together with their profile."""
        return TokenResponse(
            access_token=self.create_access_token(user.id, user.email),
            expires_in=int(self.access_token_expire.total_seconds()),
            user=UserWithMetrics.from_user(user),
        )

    def verify_token(self, token: str, expected_type: str = "access") -> Optional[TokenPayload]:
        """
        Verify and decode a JWT token.

        Args:
            token: The JWT token to verify
            expected_type: Expected token type

        Returns:
            Decoded token payload or None if invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )

            if payload.get("type") != expected_type:
                logger.warning(f"Token type mismatch: expected {expected_type}")
                return None

            return TokenPayload(
                sub=payload["sub"],
                email=payload["email"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                type=payload["type"],
            )

        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[UserProfile]:
        result = await db.execute(
            select(UserProfile).where(UserProfile.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, data: RegisterRequest) -> UserProfile:
        """
        Create a new account.

        The target weight defaults to the weight at registration.

        Raises:
            EmailAlreadyRegistered: If the email is taken
        """
        if await self.get_user_by_email(db, data.email):
            raise EmailAlreadyRegistered(data.email)

        user = UserProfile(
            email=data.email.lower(),
            password_hash=self.hash_password(data.password),
            is_active=True,
            name=data.name,
            gender=data.gender,
            age=data.age,
            weight_kg=data.weight_kg,
            height_cm=data.height_cm,
            activity_level=data.activity_level,
            goal=data.goal,
            target_weight_kg=data.target_weight_kg or data.weight_kg,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(
        self,
        db: AsyncSession,
        email: str,
        password: str,
    ) -> Optional[UserProfile]:
        """Return the user when the password matches, else None."""
        user = await self.get_user_by_email(db, email)
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            return None
        return user


# Singleton instance
auth_service = AuthService()
