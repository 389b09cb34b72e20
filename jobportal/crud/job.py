"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for job postings, including the filter/search/pagination query used by the
public listing endpoint.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from jobportal.models.job import ExperienceLevel, Job, JobSkill, JobStatus, JobType
from jobportal.schemas.job import JobCreateRequest, JobUpdateRequest

# Job.id is a 32-bit Integer column
MAX_JOB_ID = 2**31 - 1


@dataclass
class JobFilters:
    """
    Listing filters taken from the query string.

    Every field is optional; unset fields do not constrain the result.
    """
    status: Optional[JobStatus] = None
    job_type: Optional[JobType] = None
    experience: Optional[ExperienceLevel] = None
    location: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    search: Optional[str] = None


def parse_skills(raw: Optional[str]) -> List[str]:
    """Split a comma-separated skills parameter, dropping blank entries."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_query(db: Session, filters: JobFilters) -> Query:
    """
    Translate listing filters into a Job query (no ordering or paging).

    - status / job_type / experience: exact match
    - location: case-insensitive substring
    - skills: job has at least one of the listed skills
    - search: any whitespace-separated term found in title, description or a skill
    """
    query = db.query(Job)

    if filters.status:
        query = query.filter(Job.status == filters.status)
    if filters.job_type:
        query = query.filter(Job.job_type == filters.job_type)
    if filters.experience:
        query = query.filter(Job.experience == filters.experience)
    if filters.location:
        query = query.filter(Job.location.ilike(_like_pattern(filters.location), escape="\\"))
    if filters.skills:
        query = query.filter(Job.skill_rows.any(JobSkill.name.in_(filters.skills)))

    terms = filters.search.split() if filters.search else []
    if terms:
        clauses = []
        for term in terms:
            pattern = _like_pattern(term)
            clauses.extend([
                Job.title.ilike(pattern, escape="\\"),
                Job.description.ilike(pattern, escape="\\"),
                Job.skill_rows.any(JobSkill.name.ilike(pattern, escape="\\")),
            ])
        query = query.filter(or_(*clauses))

    return query


def _newest_first(query: Query) -> Query:
    # id breaks ties between rows created within the same clock tick
    return query.order_by(Job.created_at.desc(), Job.id.desc())


def get_page(
    db: Session,
    filters: JobFilters,
    page: int = 1,
    limit: int = 10
) -> Tuple[List[Job], int]:
    """
    Retrieve one page of jobs matching the filters, newest first.

    Args:
        db: Database session
        filters: Listing filters
        page: 1-based page number
        limit: Page size

    Returns:
        (jobs on the requested page, total number of matching jobs)
    """
    query = build_query(db, filters)
    total = query.count()

    offset = (page - 1) * limit
    if offset >= total:
        return [], total

    jobs = (
        _newest_first(query)
        .options(joinedload(Job.poster), selectinload(Job.skill_rows))
        .offset(offset)
        .limit(limit)
        .all()
    )
    return jobs, total


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def create(db: Session, job_data: JobCreateRequest, owner_id: UUID) -> Job:
    """
    Create a new job posting owned by owner_id.

    Args:
        db: Database session
        job_data: Validated job creation data
        owner_id: Id of the posting user

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        description=job_data.description,
        skills=job_data.skills,
        experience=job_data.experience,
        salary_min=job_data.salary.min,
        salary_max=job_data.salary.max,
        location=job_data.location,
        job_type=job_data.job_type,
        company=job_data.company,
        openings=job_data.openings,
        status=job_data.status,
        deadline=job_data.deadline,
        posted_by_id=owner_id,
        applicants=[],
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: Union[int, str]) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Ids that are not integers, or fall outside the primary key range, cannot
    exist, so they return None like any other miss.
    """
    try:
        job_id = int(job_id)
    except (TypeError, ValueError):
        return None
    if not 1 <= job_id <= MAX_JOB_ID:
        return None

    return (
        db.query(Job)
        .options(joinedload(Job.poster))
        .filter(Job.id == job_id)
        .first()
    )


def get_by_owner(db: Session, owner_id: UUID) -> List[Job]:
    """All jobs posted by owner_id, newest first."""
    query = db.query(Job).filter(Job.posted_by_id == owner_id)
    return _newest_first(query).options(selectinload(Job.skill_rows)).all()


def update(db: Session, job: Job, patch: JobUpdateRequest) -> Job:
    """
    Apply a partial update to a job.

    Only fields explicitly present in the request are written.

    Args:
        db: Database session
        job: Job to update
        patch: Validated partial update

    Returns:
        Updated Job instance
    """
    changes = patch.model_dump(exclude_unset=True)

    salary = changes.pop("salary", None)
    if salary is not None:
        job.salary_min = salary["min"]
        job.salary_max = salary["max"]

    for name, value in changes.items():
        setattr(job, name, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job: Job) -> None:
    db.delete(job)
    db.commit()


def count_by_status(db: Session, status: JobStatus) -> int:
    return db.query(Job).filter(Job.status == status).count()
