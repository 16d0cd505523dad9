"""
User profile endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.put("/profile",
            summary="Update the athlete profile.",
            response_model=UserResponse)
def update_profile(data: UserUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return UserService(db).update_profile(user, data)
