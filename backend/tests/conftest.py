"""
Shared fixtures for the CourseHub tests.

Every test gets its own app built by create_app() on a private in-memory
SQLite database, so tests never see each other's rows. bcrypt runs at its
minimum work factor to keep the suite fast.
"""

from typing import Callable, Iterator, Tuple

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from coursehub.core.config import Settings
from coursehub.core.database import init_db
from coursehub.core.security import PasswordHasher
from coursehub.main import create_app

Account = Tuple[int, Tuple[str, str]]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=4,
        ENABLE_GLOBAL_ERROR_LOGGING=True,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    # Entering the client runs the lifespan, which creates the tables
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db(app: FastAPI) -> Iterator[Session]:
    """A session on the app's database for direct inspection of rows"""
    context = app.state.context
    init_db(context.engine)
    session = context.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def signup(client: TestClient) -> Callable[..., Account]:
    """Factory that registers a user through the API and returns (id, basic auth pair)"""

    def _signup(
        email: str = "alice@example.com",
        password: str = "correct-horse",
        first_name: str = "Alice",
        last_name: str = "Smith",
    ) -> Account:
        response = client.post(
            "/api/users",
            json={
                "firstName": first_name,
                "lastName": last_name,
                "emailAddress": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        user_id = int(response.headers["location"].rsplit("/", 1)[1])
        return user_id, (email, password)

    return _signup


@pytest.fixture
def alice(signup) -> Account:
    return signup()


@pytest.fixture
def bob(signup) -> Account:
    return signup(email="bob@example.com", password="battery-staple", first_name="Bob", last_name="Jones")


@pytest.fixture
def create_course(client: TestClient) -> Callable[..., int]:
    """Factory that creates a course as the given account and returns its id"""

    def _create(account: Account, **overrides) -> int:
        owner_id, auth = account
        payload = {
            "ownerId": owner_id,
            "title": "Build a Basic Bookcase",
            "description": "High-end furniture projects are great to dream about.",
            "estimatedTime": "12 hours",
            "materialsNeeded": "* 1/2 x 3/4 inch parting strip",
        }
        payload.update(overrides)
        response = client.post("/api/courses", json=payload, auth=auth)
        assert response.status_code == 201, response.text
        return int(response.headers["location"].rsplit("/", 1)[1])

    return _create
