"""
Tests for the job query builder in the CRUD layer.
"""

from datetime import datetime, timedelta, timezone

import pytest

from jobportal.crud import job as job_crud
from jobportal.models.job import JobStatus
from conftest import make_job


class TestParseSkills:

    @pytest.mark.parametrize("raw,expected", [
        (None, []),
        ("", []),
        ("Python", ["Python"]),
        ("Python, Go ,Rust", ["Python", "Go", "Rust"]),
        ("Python,,  ,Go", ["Python", "Go"]),
    ])
    def test_parse(self, raw, expected):
        assert job_crud.parse_skills(raw) == expected


class TestTotalPages:

    @pytest.mark.parametrize("total,limit,expected", [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (12, 5, 3),
    ])
    def test_ceiling(self, total, limit, expected):
        assert job_crud.total_pages(total, limit) == expected


class TestBuildQuery:

    def test_no_filters_matches_everything(self, db_session, admin_user):
        make_job(db_session, admin_user)
        make_job(db_session, admin_user, status=JobStatus.DRAFT)

        assert job_crud.build_query(db_session, job_crud.JobFilters()).count() == 2

    def test_skills_is_set_intersection(self, db_session, admin_user):
        a = make_job(db_session, admin_user, skills=["Python", "SQL"])
        b = make_job(db_session, admin_user, skills=["SQL", "Excel"])
        make_job(db_session, admin_user, skills=["Go"])

        matched = job_crud.build_query(db_session, job_crud.JobFilters(skills=["Python", "Excel"])).all()

        assert {j.id for j in matched} == {a.id, b.id}

    def test_skill_match_is_exact(self, db_session, admin_user):
        make_job(db_session, admin_user, skills=["JavaScript"])

        filters = job_crud.JobFilters(skills=["Java"])

        assert job_crud.build_query(db_session, filters).count() == 0

    def test_job_with_several_matching_skills_counted_once(self, db_session, admin_user):
        make_job(db_session, admin_user, skills=["Python", "SQL"])

        filters = job_crud.JobFilters(skills=["Python", "SQL"])

        assert job_crud.build_query(db_session, filters).count() == 1

    def test_location_wildcards_are_literal(self, db_session, admin_user):
        make_job(db_session, admin_user, location="Berlin")
        literal = make_job(db_session, admin_user, location="100% Remote")

        matched = job_crud.build_query(db_session, job_crud.JobFilters(location="%")).all()

        assert [j.id for j in matched] == [literal.id]

    def test_search_is_case_insensitive(self, db_session, admin_user):
        make_job(db_session, admin_user, title="Machine Learning Engineer")

        filters = job_crud.JobFilters(search="MACHINE")

        assert job_crud.build_query(db_session, filters).count() == 1

    def test_blank_search_is_ignored(self, db_session, admin_user):
        make_job(db_session, admin_user)

        assert job_crud.build_query(db_session, job_crud.JobFilters(search="   ")).count() == 1


class TestGetPage:

    def test_newest_first_with_offset(self, db_session, admin_user):
        base = datetime(2026, 3, 1, tzinfo=timezone.utc)
        jobs = [make_job(db_session, admin_user, created_at=base + timedelta(days=i)) for i in range(7)]

        page, total = job_crud.get_page(db_session, job_crud.JobFilters(), page=2, limit=3)

        assert total == 7
        assert [j.id for j in page] == [jobs[3].id, jobs[2].id, jobs[1].id]

    def test_same_timestamp_falls_back_to_id(self, db_session, admin_user):
        stamp = datetime(2026, 3, 1, tzinfo=timezone.utc)
        first = make_job(db_session, admin_user, created_at=stamp)
        second = make_job(db_session, admin_user, created_at=stamp)

        page, _ = job_crud.get_page(db_session, job_crud.JobFilters(), page=1, limit=10)

        assert [j.id for j in page] == [second.id, first.id]

    def test_owner_listing(self, db_session, admin_user, other_admin):
        mine = make_job(db_session, admin_user)
        make_job(db_session, other_admin)

        assert [j.id for j in job_crud.get_by_owner(db_session, admin_user.id)] == [mine.id]
