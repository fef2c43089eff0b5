"""Seed demo data: one regular account, one admin, a few tasks.

Run: python scripts/seed_demo.py

Creates rows only if they are absent. Safe for repeats. Prints a bearer
token per account (signed with JWT_SECRET) so the API can be exercised
without the authentication service.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

from werkzeug.security import generate_password_hash

# Ensure project root (parent of scripts/) is on sys.path when run as a file.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from taskcore.app_factory import create_app  # noqa: E402
from taskcore.db import create_all, get_session  # noqa: E402
from taskcore.jwt_utils import encode as jwt_encode  # noqa: E402
from taskcore.models import Task, User  # noqa: E402

DEMO_ACCOUNTS = (
    ("demo", "demo@example.com", "user"),
    ("admin", "admin@example.com", "admin"),
)
DEMO_TASKS = (
    ("Buy milk", "pending", "medium"),
    ("File taxes", "in-progress", "high"),
    ("Water plants", "completed", "low"),
)


def main() -> None:
    app = create_app()
    with app.app_context():
        create_all()
        password = os.getenv("DEMO_PASSWORD", "demo-password")
        db = get_session()
        try:
            users: list[User] = []
            for username, email, role in DEMO_ACCOUNTS:
                user = db.query(User).filter(User.email == email).first()
                if not user:
                    user = User(
                        username=username,
                        email=email,
                        password_hash=generate_password_hash(password),
                        role=role,
                    )
                    db.add(user)
                    db.flush()
                users.append(user)
            owner = users[0]
            if not db.query(Task).filter(Task.user_id == owner.id).first():
                for title, status, priority in DEMO_TASKS:
                    db.add(Task(title=title, status=status, priority=priority, user_id=owner.id))
            db.commit()
            secret = app.config["JWT_SECRET"]
            for user in users:
                token = jwt_encode({"sub": user.id}, secret=secret)
                print(f"{user.role:<6} {user.email:<20} id={user.id}")
                print(f"       Authorization: Bearer {token}")
        finally:
            db.close()


if __name__ == "__main__":
    main()
