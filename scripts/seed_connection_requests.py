from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from slugconnect.database import SessionLocal  # noqa: E402
from slugconnect.errors import SlugConnectError  # noqa: E402
from slugconnect.services.auth_service import get_user_by_email  # noqa: E402
from slugconnect.services.connection_service import seed_requests_to_user  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a pending connection request from every other profile to one user (test data)."
    )
    parser.add_argument("--email", required=True, help="Email of the user who should receive the requests")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all of the user's existing requests first",
    )
    args = parser.parse_args(argv)

    with SessionLocal() as db:
        try:
            user = get_user_by_email(db, args.email)
            if user is None:
                sys.stderr.write(f"no user with email={args.email}\n")
                return 1
            result = seed_requests_to_user(db, user.id, reset=args.reset)
        except SlugConnectError as exc:
            sys.stderr.write(f"error: {exc.message}\n")
            return 1

    if result.total_users == 0:
        print("no other users found")
        return 0

    print(f"created {result.created} pending request(s) to {args.email}")
    if result.skipped:
        print(f"skipped {result.skipped} user(s) with an existing request")
    for name in result.users:
        print(f"  from {name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
