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
from slugconnect.services.connection_service import purge_requests_for_user  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Delete every connection request a user sent or received, whatever its status."
    )
    parser.add_argument("--email", required=True, help="Email of the user whose requests should be removed")
    args = parser.parse_args(argv)

    with SessionLocal() as db:
        try:
            user = get_user_by_email(db, args.email)
            if user is None:
                sys.stderr.write(f"no user with email={args.email}\n")
                return 1
            deleted = purge_requests_for_user(db, user.id)
        except SlugConnectError as exc:
            sys.stderr.write(f"error: {exc.message}\n")
            return 1

    print(f"deleted {deleted} connection request(s) for {args.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
