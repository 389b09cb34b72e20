"""
Admin API endpoints. Mounted under /admin when ENABLE_ADMIN_ROUTES is set.

Every route requires a bearer token belonging to an account with the admin role.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobportal.core.database import get_db
from jobportal.core.deps import admin_only
from jobportal.crud import job as job_crud
from jobportal.crud import user as user_crud
from jobportal.models.job import JobStatus
from jobportal.models.user import User
from jobportal.schemas.user import UserResponse

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


@router.get("/dashboard")
def get_dashboard(
    db: Session = Depends(get_db),
    admin_user: User = Depends(admin_only)
):
    """Admin dashboard: the caller plus job counts per status."""
    try:
        job_counts = {s.value: job_crud.count_by_status(db, s) for s in JobStatus}
    except SQLAlchemyError as e:
        logger.error(f"Error building admin dashboard: {e}")
        raise HTTPException(status_code=500, detail="Error loading dashboard") from e

    return {
        "success": True,
        "message": "Admin dashboard",
        "user": UserResponse.model_validate(admin_user).model_dump(mode="json", by_alias=True),
        "data": {"jobs": job_counts},
    }


@router.get("/users")
def list_all_users(
    db: Session = Depends(get_db),
    admin_user: User = Depends(admin_only)
):
    """List all users in the system."""
    try:
        users = user_crud.get_multi(db)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching users: {e}")
        raise HTTPException(status_code=500, detail="Error fetching users") from e

    return {
        "success": True,
        "count": len(users),
        "data": [UserResponse.model_validate(u).model_dump(mode="json", by_alias=True) for u in users],
    }
