"""
Create a staff user (admin or writer). Run from project root:
  python -m brainfeed.scripts.create_user USERNAME PASSWORD NAME [role]
Example:
  python -m brainfeed.scripts.create_user admin your-secure-password "Admin User" admin
"""
import argparse
import sys

from sqlalchemy import select

from brainfeed.core.config import get_settings
from brainfeed.core.database import create_db_engine, create_session_factory
from brainfeed.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USER_ROLES,
    USERNAME_MAX_LEN,
    hash_password,
)
from brainfeed.models.user import User


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Brainfeed staff user (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("role", nargs="?", default="writer", choices=USER_ROLES)
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print("Password must be 8-128 characters.", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not name:
        print("Name must not be empty.", file=sys.stderr)
        return 1

    session_factory = create_session_factory(create_db_engine(get_settings()))
    db = session_factory()
    try:
        existing = db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
            name=name,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
