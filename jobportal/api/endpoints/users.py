"""
Signed-in user routes. Mounted under /users when ENABLE_USER_ROUTES is set.
"""

from fastapi import APIRouter, Depends

from jobportal.core.deps import get_current_user, user_only
from jobportal.models.user import User
from jobportal.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


def _profile(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json", by_alias=True)


@router.get("/profile")
def get_profile(current_user: User = Depends(get_current_user)):
    """Profile of any authenticated account."""
    return {"success": True, "message": "User profile", "user": _profile(current_user)}


@router.get("/dashboard")
def get_dashboard(current_user: User = Depends(user_only)):
    """Dashboard for accounts with the "user" role only."""
    return {"success": True, "message": "User dashboard", "user": _profile(current_user)}
