"""
Hash and store a new password for an existing user (e.g. the bootstrap admin). Run from project root:
  python -m pushrelay.scripts.set_password USERNAME PASSWORD
Example:
  python -m pushrelay.scripts.set_password juan your-secure-password
"""
import argparse
import sys

from pushrelay.core.config import get_settings
from pushrelay.core.database import SessionLocal
from pushrelay.services.accounts import set_password


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set a user's password (stored as a bcrypt hash).")
    parser.add_argument("username", help="Existing username")
    parser.add_argument("password", help="New password")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or not args.password:
        print("Username and password must be non-empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if not set_password(db, username, args.password, get_settings()):
            print(f"User '{username}' does not exist.", file=sys.stderr)
            return 1
        print(f"Password updated for '{username}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
