import os
import sys
import uuid
from datetime import UTC, datetime

import pytest
from werkzeug.security import generate_password_hash

# Path setup before any project imports to satisfy E402
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)

from taskcore.app_factory import create_app  # noqa: E402
from taskcore.db import create_all, get_session  # noqa: E402
from taskcore.models import Task, User  # noqa: E402

JWT_TEST_SECRET = "test-secret"


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("db") / "test_app.db"
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "JWT_SECRET": JWT_TEST_SECRET,
            "database_url": f"sqlite:///{db_file}",
            "FORCE_DB_REINIT": True,
        }
    )
    with app.app_context():
        create_all()
    return app


@pytest.fixture()
def client(app):
    c = app.test_client()
    # Ensure clean base environ to avoid leakage between tests
    c.environ_base = {}
    return c


@pytest.fixture(autouse=True)
def _clean_tables(app):
    yield
    db = get_session()
    try:
        db.query(Task).delete()
        db.query(User).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def make_account(app):
    """Create an account row and return its id."""

    def _make(role: str = "user", username: str | None = None) -> str:
        n = uuid.uuid4().hex[:8]
        db = get_session()
        try:
            u = User(
                username=username or f"user-{n}",
                email=f"{username or n}@example.com",
                password_hash=generate_password_hash("pw"),
                role=role,
            )
            db.add(u)
            db.commit()
            return u.id
        finally:
            db.close()

    return _make


@pytest.fixture()
def seed_task(app):
    """Insert a task directly, with an explicit created_at for stable ordering."""

    def _seed(owner_id: str, title: str, created_at: datetime, **fields) -> str:
        db = get_session()
        try:
            t = Task(title=title, user_id=owner_id, created_at=created_at, **fields)
            db.add(t)
            db.commit()
            return t.id
        finally:
            db.close()

    return _seed


def as_user(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def ts(day: int) -> datetime:
    return datetime(2026, 1, day, 12, 0, tzinfo=UTC)
