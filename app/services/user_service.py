"""
User service.

Business logic for registration, authentication and profile updates.
"""

import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.logging import get_logger
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserUpdate

logger = get_logger(__name__)


def issue_token(user: User) -> str:
    """Bearer token for *user*; ``sub`` carries the user id."""
    return create_access_token(data={"sub": str(user.id), "email": user.email})


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = UserRepository(session)

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new user.

        Args:
            user_data: User registration data

        Returns:
            Created user

        Raises:
            HTTPException: If email already exists
        """
        if self.repository.exists_by_email(user_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="User already exists with this email")

        user = User(email=user_data.email, hashed_password=get_password_hash(user_data.password),
                    name=user_data.name, athlete_type=user_data.athlete_type,
                    fitness_level=user_data.fitness_level, age=user_data.age, weight=user_data.weight,
                    height=user_data.height, )
        user = self.repository.create(user)
        logger.info("User registered", user_id=user.id)
        return user

    def authenticate(self, login_data: UserLogin) -> User:
        """
        Check credentials and return the matching user.

        Args:
            login_data: User login credentials

        Returns:
            The authenticated user

        Raises:
            HTTPException: If credentials are invalid or the account is inactive
        """
        user = self.repository.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.hashed_password):
            logger.info("Login rejected")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials",
                                headers={"WWW-Authenticate": "Bearer"}, )

        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

        return user

    def update_profile(self, user: User, data: UserUpdate) -> User:
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field == "name":
                continue
            setattr(user, field, value)
        user.updated_at = datetime.datetime.utcnow()
        return self.repository.update(user)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.repository.get_by_id(user_id)
