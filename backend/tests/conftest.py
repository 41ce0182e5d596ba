"""pytest configuration and fixtures."""

import os

# Required settings must exist before any app module is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import Base, build_engine, get_db  # noqa: E402
from app.core.jwt import TokenIssuer, get_token_issuer  # noqa: E402
from app.main import app  # noqa: E402

TEST_SECRET = "deterministic-test-signing-key-0123456789"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test, shared across threads."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret=TEST_SECRET, expire_minutes=60)


@pytest.fixture
def client(session_factory: sessionmaker, token_issuer: TokenIssuer) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    """Sign up and log in an admin, return bearer headers."""
    client.post(
        "/api/admin/signup",
        json={"username": "umpire", "password": "s3cret-pass", "email": "umpire@example.com"},
    )
    response = client.post("/api/admin/login", json={"username": "umpire", "password": "s3cret-pass"})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
