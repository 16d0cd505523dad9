"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication, database access and
the coach service.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from app.core.security import decode_access_token, oauth2_scheme
from app.db.session import get_db
from app.models.user import User
from app.services.coach_service import CoachService
from app.services.user_service import UserService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail,
                         headers={"WWW-Authenticate": "Bearer"}, )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db), ) -> User:
    """Extract and validate the current user from the JWT token."""
    subject = decode_access_token(token)
    if not subject or not subject.isdigit():
        raise _unauthorized("Invalid or expired token")
    user = UserService(db).get_user_by_id(int(subject))
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
    return user


def get_coach(request: Request) -> CoachService:
    """The coach service built at startup."""
    return request.app.state.coach
