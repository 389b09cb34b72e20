"""
Script to create an admin account, or promote an existing account to admin.

Registration through the API always creates regular users, so this is the
way the first admin gets into the system.

Run this script from the project root:
    python create_admin.py admin@example.com "Site Admin"
The password is prompted for when the account does not exist yet.
"""

import argparse
import getpass
import sys

from jobportal.core.config import settings
from jobportal.core.database import Database
from jobportal.crud import user as user_crud
from jobportal.models.user import UserRole
from jobportal.schemas.user import UserRegisterRequest


def create_admin(email: str, name: str) -> None:
    """Create the admin account, or promote it if the email is already registered."""

    database = Database(settings.DATABASE_URL, create_tables=settings.AUTO_CREATE_TABLES)
    database.connect()
    db = database.session()

    try:
        user = user_crud.get_by_email(db, email)

        if user:
            if user.is_admin:
                print(f"{user.email} is already an admin. Nothing to do.")
                return
            user_crud.set_role(db, user, UserRole.ADMIN)
            print(f"✓ Promoted {user.email} (ID: {user.id}) to admin")
            return

        password = getpass.getpass("Password for the new admin: ")
        confirm = getpass.getpass("Repeat password: ")
        if password != confirm:
            print("Passwords do not match. Nothing was created.")
            sys.exit(1)

        request = UserRegisterRequest(name=name, email=email, password=password)
        user = user_crud.create(db, request, role=UserRole.ADMIN)
        print(f"✓ Created admin {user.email} (ID: {user.id})")

    except Exception as e:
        db.rollback()
        print(f"\n✗ Error creating admin: {e}")
        print("Database changes have been rolled back.")
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email")
    parser.add_argument("name", nargs="?", default="Administrator")
    args = parser.parse_args()

    create_admin(args.email, args.name)
