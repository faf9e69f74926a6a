import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="qaboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("JWT_SECRET", "test-secret-for-qaboard")
os.environ.setdefault("QABOARD_LOG_JSON", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from qaboard import models  # noqa: E402,F401
from qaboard.database import Base, get_engine, get_session_factory  # noqa: E402
from qaboard.main import app  # noqa: E402
from qaboard.models import User  # noqa: E402

PASSWORD = "password123"  # noqa: S105


@pytest.fixture(autouse=True)
def reset_db():
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert a user row directly, skipping password hashing."""

    def _make(name: str, email: str | None = None) -> User:
        user = User(
            name=name,
            email=email or f"{name.replace(' ', '.').lower()}@example.com",
            password_hash="not-a-real-hash",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        # release the read transaction so API requests can write
        db.commit()
        return user

    return _make


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_and_login(client):
    def _register(name: str, email: str | None = None, password: str = PASSWORD) -> dict:
        email = email or f"{name.lower()}@example.com"
        r = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert r.status_code in (200, 409)
        r = client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        assert r.status_code == 200
        token = r.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _register
