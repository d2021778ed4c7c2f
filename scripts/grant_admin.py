"""
Grant admin privilege to an existing user and print an access token for them.

Usage:
  python scripts/grant_admin.py user@example.com
"""
from __future__ import annotations

import sys

from app.core.security import create_access_token
from app.database import SessionLocal
from app.models import User


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print("usage: grant_admin.py <email>")
        return 2

    email = argv[0].strip().lower()
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            print(f"No user with email {email}")
            return 1
        user.is_admin = True
        db.commit()
        print(f"user={user.id} is_admin=true")
        print(create_access_token(user.id))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
