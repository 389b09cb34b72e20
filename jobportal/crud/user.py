"""
CRUD operations for User model.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from jobportal.core.security import get_password_hash
from jobportal.models.user import User, UserRole
from jobportal.schemas.user import UserRegisterRequest


def create(db: Session, user_data: UserRegisterRequest, role: UserRole = UserRole.USER) -> User:
    """
    Create a new user with a hashed password.

    Raises:
        sqlalchemy.exc.IntegrityError: If the email is already taken
    """
    db_user = User(
        name=user_data.name,
        email=user_data.email.lower(),
        hashed_password=get_password_hash(user_data.password),
        role=role,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user


def get_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_multi(db: Session) -> List[User]:
    """All users, newest first."""
    return db.query(User).order_by(User.created_at.desc()).all()


def set_role(db: Session, user: User, role: UserRole) -> User:
    user.role = role
    db.commit()
    db.refresh(user)
    return user
