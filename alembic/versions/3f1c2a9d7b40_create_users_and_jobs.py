"""create_users_and_jobs

Creates the users, jobs and job_skills tables.

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


USER_ROLES = ('user', 'admin', 'employee')
JOB_STATUSES = ('Active', 'Closed', 'Draft')
JOB_TYPES = ('Full-time', 'Part-time', 'Contract', 'Internship', 'Remote')
EXPERIENCE_LEVELS = ('Fresher', '0-1 years', '1-3 years', '3-5 years', '5-10 years', '10+ years')


def upgrade() -> None:
    """Create the job board schema."""

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum(*USER_ROLES, name='userrole'), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('experience', sa.Enum(*EXPERIENCE_LEVELS, name='experiencelevel'), nullable=False),
        sa.Column('salary_min', sa.Float(), nullable=False),
        sa.Column('salary_max', sa.Float(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('job_type', sa.Enum(*JOB_TYPES, name='jobtype'), nullable=False),
        sa.Column('company', sa.String(), nullable=False),
        sa.Column('openings', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('status', sa.Enum(*JOB_STATUSES, name='jobstatus'), nullable=False, server_default='Active'),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('posted_by_id', sa.Uuid(), nullable=False),
        sa.Column('applicants', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['posted_by_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('salary_min <= salary_max', name='ck_jobs_salary_range'),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_posted_by_id', 'jobs', ['posted_by_id'])
    op.create_index('ix_jobs_status_created_at', 'jobs', ['status', 'created_at'])

    op.create_table(
        'job_skills',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_job_skills_job_id', 'job_skills', ['job_id'])
    op.create_index('ix_job_skills_name', 'job_skills', ['name'])


def downgrade() -> None:
    """Drop the job board schema."""
    op.drop_table('job_skills')
    op.drop_table('jobs')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_name in ('jobstatus', 'jobtype', 'experiencelevel', 'userrole'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
