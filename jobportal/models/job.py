import enum
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, DateTime, Enum, Float, ForeignKey, Index, JSON, Uuid
from sqlalchemy.orm import relationship
from jobportal.core.database import Base
from jobportal.models.user import utcnow


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class JobStatus(str, enum.Enum):
    """
    Posting visibility.

    - ACTIVE: open for applications
    - CLOSED: no longer accepting applications
    - DRAFT: not yet published
    """
    ACTIVE = "Active"
    CLOSED = "Closed"
    DRAFT = "Draft"


class JobType(str, enum.Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    REMOTE = "Remote"


class ExperienceLevel(str, enum.Enum):
    FRESHER = "Fresher"
    ZERO_TO_ONE = "0-1 years"
    ONE_TO_THREE = "1-3 years"
    THREE_TO_FIVE = "3-5 years"
    FIVE_TO_TEN = "5-10 years"
    TEN_PLUS = "10+ years"


class JobSkill(Base):
    """
    One required skill of a job posting.

    Skills live in their own table so "has any of these skills" is a plain
    EXISTS subquery on every database backend.
    """
    __tablename__ = "job_skills"

    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    job = relationship("Job", back_populates="skill_rows")

    def __repr__(self):
        return f"<JobSkill(job_id={self.job_id}, name='{self.name}')>"


class Job(Base):
    """
    Job model representing a job posting on the board.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    experience = Column(Enum(ExperienceLevel, name="experiencelevel", values_callable=_enum_values), nullable=False)

    # Salary range; min <= max is also checked by the request schemas
    salary_min = Column(Float, nullable=False)
    salary_max = Column(Float, nullable=False)

    location = Column(String, nullable=False)
    job_type = Column(Enum(JobType, name="jobtype", values_callable=_enum_values), nullable=False)
    company = Column(String, nullable=False)
    openings = Column(Integer, default=1, nullable=False)
    status = Column(
        Enum(JobStatus, name="jobstatus", values_callable=_enum_values),
        default=JobStatus.ACTIVE,
        nullable=False,
    )
    deadline = Column(DateTime(timezone=True), nullable=False)

    posted_by_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Ids of Application records owned by another service
    applicants = Column(JSON, default=list, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    poster = relationship("User", back_populates="jobs")
    skill_rows = relationship(
        "JobSkill",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobSkill.id",
    )

    __table_args__ = (
        Index("ix_jobs_status_created_at", "status", "created_at"),
        CheckConstraint("salary_min <= salary_max", name="ck_jobs_salary_range"),
    )

    @property
    def skills(self) -> list:
        return [row.name for row in self.skill_rows]

    @skills.setter
    def skills(self, names) -> None:
        self.skill_rows = [JobSkill(name=name) for name in names]

    @property
    def salary(self) -> dict:
        return {"min": self.salary_min, "max": self.salary_max}

    @property
    def applicant_count(self) -> int:
        return len(self.applicants) if self.applicants else 0

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', status={self.status.value})>"
