"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users, bearer tokens and job postings
"""

import os

# Keep the application's own lifespan database in memory during tests
os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobportal.core.config import Settings
from jobportal.core.database import Base, get_db
from jobportal.core.security import create_access_token, get_password_hash
from jobportal.models.job import ExperienceLevel, Job, JobStatus, JobType
from jobportal.models.user import User, UserRole
from main import app, create_app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Hashing once keeps the suite fast; bcrypt is deliberately slow
TEST_PASSWORD = "Secret123!"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def _client_for(application, db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    return TestClient(application)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    with _client_for(app, db_session) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def full_client(db_session):
    """Test client for an app with the optional /users and /admin mounts enabled."""
    application = create_app(Settings(
        DATABASE_URI="sqlite://",
        ENABLE_USER_ROUTES=True,
        ENABLE_ADMIN_ROUTES=True,
    ))

    with _client_for(application, db_session) as test_client:
        yield test_client

    application.dependency_overrides.clear()


def make_user(db_session, email: str, role: UserRole = UserRole.USER, name: str = "Test User") -> User:
    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        hashed_password=TEST_PASSWORD_HASH,
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": UserRole(user.role).value})
    return {"Authorization": f"Bearer {token}"}


def make_job(db_session, owner: User, created_at: datetime = None, **overrides) -> Job:
    """Insert a job directly, bypassing the API (and its deadline check)."""
    now = datetime.now(timezone.utc)
    fields = dict(
        title="Backend Engineer",
        description="Build and run the services behind our job board.",
        skills=["Python", "SQL"],
        experience=ExperienceLevel.ONE_TO_THREE,
        salary_min=50000,
        salary_max=80000,
        location="Berlin, Germany",
        job_type=JobType.FULL_TIME,
        company="Acme",
        openings=1,
        status=JobStatus.ACTIVE,
        deadline=now + timedelta(days=30),
        posted_by_id=owner.id,
        applicants=[],
        created_at=created_at or now,
    )
    fields.update(overrides)
    job = Job(**fields)
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, "admin@example.com", role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def other_admin(db_session):
    return make_user(db_session, "admin2@example.com", role=UserRole.ADMIN, name="Second Admin")


@pytest.fixture
def regular_user(db_session):
    return make_user(db_session, "user@example.com", role=UserRole.USER, name="Regular User")


@pytest.fixture
def employee_user(db_session):
    return make_user(db_session, "employee@example.com", role=UserRole.EMPLOYEE, name="Employee")


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return auth_headers(regular_user)


@pytest.fixture
def sample_job_data():
    """Valid POST /api/jobs body"""
    return {
        "title": "Senior Python Developer",
        "description": "We are looking for a Senior Python Developer to own our API platform.",
        "skills": ["Python", "FastAPI", "PostgreSQL"],
        "experience": "3-5 years",
        "salary": {"min": 90000, "max": 120000},
        "location": "Remote, EU",
        "jobType": "Full-time",
        "company": "Acme Corp",
        "deadline": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
    }
