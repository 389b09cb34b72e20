import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, HTTPException, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobportal.core.config import settings
from jobportal.core.database import get_db
from jobportal.core.deps import admin_only, get_current_user
from jobportal.core.permissions import can_modify_job
from jobportal.crud import job as job_crud
from jobportal.models.job import ExperienceLevel, Job, JobStatus, JobType
from jobportal.models.user import User
from jobportal.schemas.job import JobCreateRequest, JobResponse, JobUpdateRequest, OwnJobResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def _job_data(job: Job) -> dict:
    return JobResponse.model_validate(job).model_dump(mode="json", by_alias=True)


def _load_job_or_404(db: Session, job_id: str) -> Job:
    job = job_crud.get_by_id(db, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("", status_code=201)
def create_job(
    request: JobCreateRequest,
    current_user: User = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """
    Create a new job posting owned by the calling admin.

    Defaults: openings=1, status=Active. The deadline must be in the future
    and salary.min may not exceed salary.max.
    """
    try:
        new_job = job_crud.create(db, request, owner_id=current_user.id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating job: {e}")
        raise HTTPException(status_code=500, detail="Error creating job") from e

    logger.info(f"Created job {new_job.id}: {new_job.title} (posted by {current_user.email})")

    return {
        "success": True,
        "message": "Job created successfully",
        "data": _job_data(new_job),
    }


@router.get("")
def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.PAGE_SIZE_DEFAULT, ge=1),
    status: Optional[JobStatus] = None,
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    experience: Optional[ExperienceLevel] = None,
    location: Optional[str] = None,
    skills: Optional[str] = Query(None, description="Comma-separated; matches jobs having any of them"),
    search: Optional[str] = Query(None, description="Free text matched against title, description and skills"),
    db: Session = Depends(get_db)
):
    """
    List jobs with filtering, text search and pagination, newest first.

    Args:
        page: 1-based page number (default: 1)
        limit: Page size (default: 10, max: 100)
        status / jobType / experience: exact-match filters
        location: case-insensitive substring match
        skills: comma-separated list, any match
        search: free-text search
    """
    if limit > settings.PAGE_SIZE_MAX:
        limit = settings.PAGE_SIZE_MAX

    filters = job_crud.JobFilters(
        status=status,
        job_type=job_type,
        experience=experience,
        location=location,
        skills=job_crud.parse_skills(skills),
        search=search,
    )

    try:
        jobs, total = job_crud.get_page(db, filters, page=page, limit=limit)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching jobs: {e}")
        raise HTTPException(status_code=500, detail="Error fetching jobs") from e

    return {
        "success": True,
        "count": len(jobs),
        "total": total,
        "totalPages": job_crud.total_pages(total, limit),
        "currentPage": page,
        "data": [_job_data(job) for job in jobs],
    }


@router.get("/admin/my-jobs")
def list_my_jobs(
    current_user: User = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """All jobs posted by the calling admin, newest first."""
    try:
        jobs = job_crud.get_by_owner(db, current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching jobs of {current_user.email}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching your jobs") from e

    return {
        "success": True,
        "count": len(jobs),
        "data": [OwnJobResponse.model_validate(job).model_dump(mode="json", by_alias=True) for job in jobs],
    }


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.
    """
    try:
        job = _load_job_or_404(db, job_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching job {job_id}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching job") from e

    return {"success": True, "data": _job_data(job)}


@router.put("/{job_id}")
def update_job(
    job_id: str,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Partially update a job. Only its poster or an admin may do this.

    The body is validated after the existence and ownership checks, so a
    caller without rights gets 403 even when the patch itself is invalid.
    """
    job = _load_job_or_404(db, job_id)

    if not can_modify_job(current_user, job):
        raise HTTPException(status_code=403, detail="Not authorized to update this job")

    try:
        patch = JobUpdateRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    try:
        updated_job = job_crud.update(db, job, patch)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating job {job_id}: {e}")
        raise HTTPException(status_code=500, detail="Error updating job") from e

    logger.info(f"Updated job {updated_job.id} by {current_user.email}: {sorted(patch.model_fields_set)}")

    return {
        "success": True,
        "message": "Job updated successfully",
        "data": _job_data(updated_job),
    }


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a job by ID. Only its poster or an admin may do this.
    """
    job = _load_job_or_404(db, job_id)

    if not can_modify_job(current_user, job):
        raise HTTPException(status_code=403, detail="Not authorized to delete this job")

    try:
        job_crud.delete(db, job)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting job {job_id}: {e}")
        raise HTTPException(status_code=500, detail="Error deleting job") from e

    logger.info(f"Deleted job {job_id} by {current_user.email}")

    return {"success": True, "message": "Job deleted successfully"}
