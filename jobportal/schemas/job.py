from pydantic import BaseModel, ConfigDict, Field, UUID4, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from typing import List, Optional, Union
from datetime import datetime, timezone

from jobportal.models.job import ExperienceLevel, JobStatus, JobType


SALARY_RANGE_MESSAGE = "Minimum salary cannot be greater than maximum salary"
DEADLINE_MESSAGE = "Deadline must be a future date"
SKILLS_MESSAGE = "At least one skill is required"
# openings is stored in a 32-bit Integer column
MAX_OPENINGS = 2**31 - 1


def _normalize_skills(v: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept a single skill or a list, strip whitespace and drop blanks."""
    if v is None:
        return v
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list):
        return v  # let the list[str] validation report the type error
    skills = [s.strip() for s in v if isinstance(s, str) and s.strip()]
    if not skills:
        raise PydanticCustomError("skills_required", SKILLS_MESSAGE)
    return skills


def _ensure_future(v: Optional[datetime]) -> Optional[datetime]:
    if v is None:
        return v
    # Naive datetimes are taken as UTC
    aware = v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)
    if aware <= datetime.now(timezone.utc):
        raise PydanticCustomError("deadline_past", DEADLINE_MESSAGE)
    return aware


class SalaryRange(BaseModel):
    """Salary band; min may equal max but never exceed it."""
    min: float = Field(..., ge=0, allow_inf_nan=False)
    max: float = Field(..., ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_range(self) -> "SalaryRange":
        if self.min > self.max:
            raise PydanticCustomError("salary_range", SALARY_RANGE_MESSAGE)
        return self


class JobCreateRequest(BaseModel):
    """Schema for creating a new job posting"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=20, max_length=5000)
    skills: List[str]
    experience: ExperienceLevel
    salary: SalaryRange
    location: str = Field(..., min_length=1)
    job_type: JobType
    company: str = Field(..., min_length=1)
    openings: int = Field(1, ge=1, le=MAX_OPENINGS)
    status: JobStatus = JobStatus.ACTIVE
    deadline: datetime

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, v):
        return _normalize_skills(v)

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, v: datetime) -> datetime:
        return _ensure_future(v)


class JobUpdateRequest(BaseModel):
    """
    Partial update of a job posting.

    Only fields present in the request body are applied. Each one goes through
    the same checks as on creation; a salary patch must carry both bounds.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=20, max_length=5000)
    skills: Optional[List[str]] = None
    experience: Optional[ExperienceLevel] = None
    salary: Optional[SalaryRange] = None
    location: Optional[str] = Field(None, min_length=1)
    job_type: Optional[JobType] = None
    company: Optional[str] = Field(None, min_length=1)
    openings: Optional[int] = Field(None, ge=1, le=MAX_OPENINGS)
    status: Optional[JobStatus] = None
    deadline: Optional[datetime] = None

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, v):
        return _normalize_skills(v)

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _ensure_future(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "JobUpdateRequest":
        # Every job column is required, so null cannot be stored
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise PydanticCustomError(
                    "null_field",
                    "{field} cannot be null",
                    {"field": to_camel(name)},
                )
        return self


class PosterSummary(BaseModel):
    """The posting user's public fields, embedded in job responses."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID4
    name: str
    email: str


class JobResponse(BaseModel):
    """Schema for job response with the poster populated"""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: str
    skills: List[str]
    experience: ExperienceLevel
    salary: SalaryRange
    location: str
    job_type: JobType
    company: str
    openings: int
    status: JobStatus
    deadline: datetime
    posted_by: Optional[PosterSummary] = Field(None, validation_alias="poster", serialization_alias="postedBy")
    applicants: List[str] = []
    applicant_count: int = 0
    created_at: datetime
    updated_at: datetime


class OwnJobResponse(JobResponse):
    """Job as listed for its owner; postedBy is the bare user id."""
    posted_by: UUID4 = Field(..., validation_alias="posted_by_id", serialization_alias="postedBy")
