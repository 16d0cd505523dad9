"""
Authentication endpoints.

Registration, login (JSON body or OAuth2 form) and the current profile.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import AuthResponse, Token, UserCreate, UserLogin, UserResponse
from app.services.user_service import UserService, issue_token

router = APIRouter()


@router.post("/register",
             summary="User registration endpoint.",
             response_model=AuthResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.

    Args:
        user_data: Name, email, password and optional athlete profile
        db: Database session

    Returns:
        Bearer token and the created profile (without password)

    Raises:
        HTTPException 400: If email already registered
    """
    user = UserService(db).register(user_data)
    return AuthResponse(message="User registered successfully", token=issue_token(user),
                        user=UserResponse.model_validate(user))


@router.post("/login",
             summary="User login endpoint via JSON.",
             response_model=AuthResponse)
def login(login_data: UserLogin, db: Session = Depends(get_db)):
    user = UserService(db).authenticate(login_data)
    return AuthResponse(message="Login successful", token=issue_token(user), user=UserResponse.model_validate(user))


@router.post("/token",
             summary="User login endpoint via OAuth2 form (for Swagger UI).",
             response_model=Token)
def login_form(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """
    Authenticate user via OAuth2 form (for Swagger UI).

    Use email as username.
    """
    login_data = UserLogin.model_construct(email=form_data.username, password=form_data.password)
    user = UserService(db).authenticate(login_data)
    return Token(access_token=issue_token(user))


@router.get("/me",
            summary="User info endpoint.",
            response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user
