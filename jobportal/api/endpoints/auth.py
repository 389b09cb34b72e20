"""
Authentication endpoints for user registration, login, and profile lookup.

Implements JWT-based stateless authentication:
- POST /register: Create new user account
- POST /login: Authenticate and receive a JWT
- GET /me: Get current user profile
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobportal.core.database import get_db
from jobportal.core.deps import get_current_user
from jobportal.core.security import create_access_token, verify_password
from jobportal.crud import user as user_crud
from jobportal.models.user import User
from jobportal.schemas.user import (
    AuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    auth = AuthResponse(token=token, user=UserResponse.model_validate(user))
    return auth.model_dump(mode="json", by_alias=True)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    New accounts always get the "user" role; admins are provisioned with create_admin.py.
    Returns a JWT for immediate login.
    """
    if user_crud.get_by_email(db, request.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )

    try:
        new_user = user_crud.create(db, request)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {request.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error registering user"
        ) from e

    logger.info(f"New user registered: {new_user.email} (id: {new_user.id})")

    return {
        "success": True,
        "message": "User registered successfully",
        "data": _issue_token(new_user),
    }


@router.post("/login")
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT.
    """
    user = user_crud.get_by_email(db, request.email)
    if not user or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User logged in: {user.email} (role: {user.role.value})")

    return {
        "success": True,
        "message": "Login successful",
        "data": _issue_token(user),
    }


@router.get("/me")
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user's profile.

    Requires valid JWT token in Authorization header.
    """
    return {
        "success": True,
        "data": UserResponse.model_validate(current_user).model_dump(mode="json", by_alias=True),
    }
