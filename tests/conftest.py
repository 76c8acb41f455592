"""
Pytest fixtures for DevConnector tests.

Each test gets a fresh in-memory SQLite database built through the same
Database class the app uses.
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from devconnector.config import Settings  # noqa: E402
from devconnector.db import Database  # noqa: E402
from devconnector.models import User  # noqa: E402

from factories import create_user  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        jwt_secret_key=TEST_JWT_SECRET,
        database_url="sqlite://",
        env="test",
        github_client_id="",
        github_client_secret="",
        github_api_base="https://api.github.com",
    )


@pytest.fixture(scope="function")
def test_db(test_settings):
    """Create a fresh test database for each test."""
    database = Database(settings=test_settings)
    database.create_all_tables()

    yield database

    database.drop_all_tables()
    database.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    session = test_db.SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def test_user(test_db) -> User:
    return create_user(test_db, "Jane Doe")


@pytest.fixture
def other_user(test_db) -> User:
    return create_user(test_db, "John Roe")


@pytest.fixture
def sample_profile_payload():
    """Profile form as the client submits it."""
    return {
        "status": "Senior Software Developer",
        "skills": "Python, FastAPI ,SQL",
        "company": "Acme",
        "website": "https://acme.example.com",
        "location": "Boston, MA",
        "githubusername": "octocat",
        "bio": "Backend developer",
        "twitter": "https://twitter.com/jane",
        "linkedin": "https://linkedin.com/in/jane",
        "youtube": "",
    }
