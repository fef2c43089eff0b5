"""Grant or revoke the admin role for an existing account.

Usage: python scripts/set_role.py EMAIL {user,admin}

The gate re-reads roles on every request, so the change applies to the
account's very next call.
"""
import argparse
import sys
from pathlib import Path

# Ensure project root on sys.path when running as standalone script
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from taskcore.app_factory import create_app  # noqa: E402
from taskcore.db import get_session  # noqa: E402
from taskcore.models import User  # noqa: E402
from taskcore.roles import ROLES  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("role", choices=ROLES)
    args = parser.parse_args(argv)

    create_app()  # resolves DATABASE_URL the same way the server does
    db = get_session()
    try:
        user = db.query(User).filter(User.email == args.email.strip().lower()).first()
        if not user:
            sys.stderr.write(f"[ERROR] No account with email {args.email}\n")
            return 1
        previous = user.role
        user.role = args.role
        db.commit()
        print(f"Role updated: id={user.id} email={user.email} {previous} -> {user.role}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
