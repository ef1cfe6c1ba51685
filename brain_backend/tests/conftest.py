import os
import pytest

# Configuration must exist before the app module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-signing-secret")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from brain_backend.api import config
from brain_backend.api.main import app, get_db
from brain_database.models import Base

API = config.API_PREFIX


@pytest.fixture(scope="session")
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"

@pytest.fixture(scope="session")
def engine(sqlite_url):
    """Fixture for a persistent in-memory SQLite engine for the test session."""
    return create_engine(
        sqlite_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )

@pytest.fixture
def tables(engine):
    """Create tables for each test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(engine, tables):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def client(db_session):
    """Fixture for FastAPI TestClient with test DB dependency override."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

@pytest.fixture
def user_data():
    """Returns default credentials for signup."""
    return {"username": "alice", "password": "Sup3r!Secret"}

@pytest.fixture
def second_user_data():
    """Returns a second user's credentials."""
    return {"username": "bob", "password": "B0b$ecret"}

@pytest.fixture
def content_data():
    return {
        "types": "youtube",
        "link": "https://youtube.com/watch?v=x",
        "title": "t",
        "tags": "Education",
    }

def signup_and_signin(client, username, password):
    """Helper for signing up then signing in to get a session token."""
    r1 = client.post(f"{API}/signup", json={"username": username, "password": password})
    assert r1.status_code == 201

    r2 = client.post(f"{API}/signin", json={"username": username, "password": password})
    assert r2.status_code == 200
    return r2.json()["token"]

@pytest.fixture
def auth_header(client, user_data):
    """Returns {'token': <session token>} for the default user."""
    token = signup_and_signin(client, user_data["username"], user_data["password"])
    return {"token": token}

@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns the session token header for the second user."""
    token = signup_and_signin(client, second_user_data["username"], second_user_data["password"])
    return {"token": token}
