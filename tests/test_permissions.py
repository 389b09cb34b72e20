"""
Unit tests for the authorization predicates and the role gate dependency.

No database or HTTP involved: users and jobs are transient ORM objects.
"""

import asyncio
import uuid

import pytest
from fastapi import HTTPException

from jobportal.core.deps import admin_only, authenticated_only, require_roles, user_only
from jobportal.core.permissions import can_modify_job, is_role_allowed
from jobportal.models.job import Job
from jobportal.models.user import User, UserRole


def _user(role: UserRole) -> User:
    return User(id=uuid.uuid4(), name="Someone", email=f"{uuid.uuid4()}@example.com", role=role)


class TestIsRoleAllowed:

    @pytest.mark.parametrize("role,allowed,expected", [
        (UserRole.ADMIN, [UserRole.ADMIN], True),
        (UserRole.USER, [UserRole.ADMIN], False),
        (UserRole.USER, [UserRole.USER, UserRole.ADMIN], True),
        (UserRole.EMPLOYEE, [UserRole.USER, UserRole.ADMIN], False),
        (UserRole.ADMIN, [], False),
    ])
    def test_role_in_allow_list(self, role, allowed, expected):
        assert is_role_allowed(_user(role), allowed) is expected

    def test_accepts_plain_strings(self):
        assert is_role_allowed(_user(UserRole.ADMIN), ["admin"])

    def test_no_identity(self):
        assert is_role_allowed(None, [UserRole.USER]) is False


class TestCanModifyJob:

    def test_owner(self):
        owner = _user(UserRole.USER)
        job = Job(posted_by_id=owner.id)

        assert can_modify_job(owner, job)

    def test_admin_who_is_not_owner(self):
        job = Job(posted_by_id=uuid.uuid4())

        assert can_modify_job(_user(UserRole.ADMIN), job)

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.EMPLOYEE])
    def test_other_non_admin(self, role):
        job = Job(posted_by_id=uuid.uuid4())

        assert not can_modify_job(_user(role), job)

    def test_no_identity(self):
        assert not can_modify_job(None, Job(posted_by_id=uuid.uuid4()))


class TestRoleGate:

    def test_allows_listed_role(self):
        admin = _user(UserRole.ADMIN)

        assert asyncio.run(admin_only(admin)) is admin

    def test_missing_identity_is_unauthenticated(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(admin_only(None))

        assert exc_info.value.status_code == 401

    def test_wrong_role_is_forbidden(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(admin_only(_user(UserRole.USER)))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Role 'user' is not authorized to access this route"

    def test_user_only_rejects_admin(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(user_only(_user(UserRole.ADMIN)))

        assert exc_info.value.status_code == 403

    def test_custom_allow_list(self):
        gate = require_roles(UserRole.EMPLOYEE, UserRole.ADMIN)
        employee = _user(UserRole.EMPLOYEE)

        assert asyncio.run(gate(employee)) is employee

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.ADMIN])
    def test_authenticated_only_allows_user_and_admin(self, role):
        user = _user(role)

        assert asyncio.run(authenticated_only(user)) is user

    def test_authenticated_only_rejects_employee(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(authenticated_only(_user(UserRole.EMPLOYEE)))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Role 'employee' is not authorized to access this route"
