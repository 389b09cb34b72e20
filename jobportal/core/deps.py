"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from jobportal.core.database import get_db
from jobportal.core.permissions import ADMIN_ONLY, AUTHENTICATED, USER_ONLY, is_role_allowed
from jobportal.core.security import decode_token
from jobportal.crud import user as user_crud
from jobportal.models.user import User, UserRole

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so a missing header is reported as 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Fetches the user from the database

    Raises:
        HTTPException 401: If the token is missing or invalid, or the user no longer exists
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized, token failed",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(credentials.credentials)
        user_id = UUID(str(payload.get("sub")))
    except (JWTError, ValueError):
        raise credentials_exception

    user = user_crud.get_by_id(db, user_id)
    if user is None:
        raise credentials_exception

    return user


def require_roles(*roles: UserRole):
    """
    Build a dependency that only lets users with one of the given roles through.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def role_gate(user: Optional[User] = Depends(get_current_user)) -> User:
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authorized",
            )
        if not is_role_allowed(user, roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{UserRole(user.role).value}' is not authorized to access this route",
            )
        return user

    return role_gate


admin_only = require_roles(*ADMIN_ONLY)
user_only = require_roles(*USER_ONLY)
authenticated_only = require_roles(*AUTHENTICATED)
