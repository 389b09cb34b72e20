"""
Database models package.
"""

from jobportal.models.user import User, UserRole
from jobportal.models.job import Job, JobSkill, JobStatus, JobType, ExperienceLevel

__all__ = ["User", "UserRole", "Job", "JobSkill", "JobStatus", "JobType", "ExperienceLevel"]
