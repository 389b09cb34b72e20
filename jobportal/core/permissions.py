"""
Authorization predicates.

Plain functions with no FastAPI or database coupling, so every rule can be
checked in isolation. core.deps turns them into request dependencies.
"""

from typing import Iterable, Optional

from jobportal.models.job import Job
from jobportal.models.user import User, UserRole


def is_role_allowed(user: Optional[User], allowed_roles: Iterable[UserRole]) -> bool:
    """True when user is present and its role is in allowed_roles."""
    if user is None:
        return False
    return UserRole(user.role) in set(UserRole(r) for r in allowed_roles)


def can_modify_job(user: Optional[User], job: Job) -> bool:
    """
    Owner-or-admin capability check for changing or deleting a job.

    The poster of a job may always modify it; admins may modify any job.
    """
    if user is None:
        return False
    if job.posted_by_id == user.id:
        return True
    return UserRole(user.role) == UserRole.ADMIN


ADMIN_ONLY = (UserRole.ADMIN,)
USER_ONLY = (UserRole.USER,)
AUTHENTICATED = (UserRole.USER, UserRole.ADMIN)
