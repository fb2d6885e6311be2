"""
Create a back-office user (e.g. the first admin) without going through the UI.
Run from project root:
  python -m poseidon.scripts.create_user USERNAME PASSWORD FULLNAME [ROLE]
Example:
  python -m poseidon.scripts.create_user admin 'S3cure!pass' "Administrator" ADMIN
"""
import argparse
import logging
import re
import sys

from poseidon.core.config import settings
from poseidon.core.database import SessionLocal
from poseidon.core.errors import PersistenceFailure
from poseidon.core.logging import setup_logging
from poseidon.core.security import hash_password
from poseidon.models import User
from poseidon.repositories.users import UserRepository
from poseidon.services.users import PASSWORD_PATTERN, PASSWORD_RULE_MESSAGE

logger = logging.getLogger(__name__)

MAX_LEN = 125


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Poseidon user.")
    parser.add_argument("username", help=f"Username (1-{MAX_LEN} chars, unique)")
    parser.add_argument("password", help="Password (8+ chars, one digit, one special character)")
    parser.add_argument("fullname", help=f"Full name (1-{MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="USER", help="Role, e.g. ADMIN or USER (default USER)")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL)

    username = args.username.strip()
    fullname = args.fullname.strip()
    role = args.role.strip()
    if not username or len(username) > MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not fullname or len(fullname) > MAX_LEN:
        print("Invalid full name length.", file=sys.stderr)
        return 1
    if not role or len(role) > MAX_LEN:
        print("Invalid role length.", file=sys.stderr)
        return 1
    if re.fullmatch(PASSWORD_PATTERN, args.password) is None:
        print(PASSWORD_RULE_MESSAGE, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UserRepository(db)
        if users.find_by_username(username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        users.save(
            User(
                username=username,
                password_hash=hash_password(args.password),
                fullname=fullname,
                role=role,
            )
        )
    except PersistenceFailure as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user %s with role %s", username, role)
    print(f"Created user '{username}' with role '{role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
