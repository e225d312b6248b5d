from __future__ import annotations

import os
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["ORM_USE_MYSQL"] = "false"

    # Ensure local .env cannot change sign-up rules under test.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["REQUIRE_EMAIL_CONFIRMATION"] = "false"
    os.environ["ALLOWED_EMAIL_DOMAIN"] = "ucsc.edu"
    os.environ["JWT_SECRET"] = "test-secret"


@pytest.fixture()
def client() -> Any:
    from slugconnect.database import Base, engine
    from slugconnect.main import create_app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db(client) -> Any:
    # Depends on client so the tables are fresh.
    from slugconnect.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_student(client) -> Callable[..., dict[str, Any]]:
    """Sign up, log in and (optionally) onboard a student; returns id, email and auth headers."""

    def _make(
        email: str,
        name: str | None = None,
        major: str = "Computer Science",
        year: str = "Junior",
        interests: list[str] | None = None,
        onboard: bool = True,
        password: str = "SlugPass1",
    ) -> dict[str, Any]:
        r = client.post("/auth/signup", json={"email": email, "password": password, "confirm_password": password})
        assert r.status_code == 201, r.text
        user_id = r.json()["user"]["id"]

        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

        if onboard:
            payload = {
                "full_name": name or email.split("@")[0].title(),
                "major": major,
                "college": "Porter College",
                "year": year,
                "interests": interests or [],
            }
            r = client.post("/users/me/onboarding", json=payload, headers=headers)
            assert r.status_code == 201, r.text

        return {"id": user_id, "email": email, "headers": headers}

    return _make
