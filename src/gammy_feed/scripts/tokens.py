# src/gammy_feed/scripts/tokens.py
"""
Mint bearer tokens for local development.

The identity provider normally issues tokens; this script signs one with the
configured SECRET_KEY so the API can be exercised without it:

  python -m gammy_feed.scripts.tokens 1
  python -m gammy_feed.scripts.tokens --create --email admin@example.com --name Admin --role admin
"""

from __future__ import annotations

import argparse
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from gammy_feed.core.security import ROLE_ADMIN, ROLE_USER, create_access_token
from gammy_feed.db.session import SessionLocal
from gammy_feed.models import User


def ensure_user(db: Session, email: str, name: str, role: str) -> User:
    """Return the user with ``email``, creating it when missing."""
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user is None:
        user = User(email=email, name=name, role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mint a bearer token for a user")
    parser.add_argument("user_id", nargs="?", type=int, help="Existing user id")
    parser.add_argument("--create", action="store_true", help="Create the user first if needed")
    parser.add_argument("--email")
    parser.add_argument("--name")
    parser.add_argument("--role", choices=[ROLE_USER, ROLE_ADMIN], default=ROLE_USER)
    args = parser.parse_args(argv)
    if args.create and not (args.email and args.name):
        parser.error("--create needs --email and --name")
    if not args.create and args.user_id is None:
        parser.error("give a user id or use --create")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    db = SessionLocal()
    try:
        if args.create:
            user_id = ensure_user(db, args.email, args.name, args.role).id
        else:
            user = db.get(User, args.user_id)
            if user is None:
                print(f"No user with id {args.user_id}", file=sys.stderr)
                return 1
            user_id = user.id
    finally:
        db.close()

    print(create_access_token(user_id))
    return 0


if __name__ == "__main__":
    sys.exit(main())
