# backend/tests/conftest.py
"""
Pytest configuration for the consultation portal.

Every test gets a fresh in-memory SQLite database. Services move store
work onto worker threads, so the engine shares one connection across
threads (StaticPool + check_same_thread=False).
"""

import os
import sys

# Set testing mode BEFORE any application imports
os.environ["IS_TESTING"] = "true"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ALLOWED_EMAIL_DOMAINS"] = "sru.edu.in,gmail.com"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("RESEND_API_KEY", None)

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)


from typing import Dict, Tuple

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from consultation_portal.api.dependencies.database import get_db
from consultation_portal.api.dependencies.services import get_notification_service
from consultation_portal.database import Base
from consultation_portal.main import app
from consultation_portal.models import Booking, FacultyProfile, User
from tests.factories.builders import TEST_PASSWORD, bearer, make_booking, make_faculty, make_student
from tests.helpers.recording_notifier import RecordingNotifier


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine) -> Session:
    """Create a new database session for each test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(db: Session, notifier: RecordingNotifier):
    """Create a test client with the test database and a recording notifier."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture
def test_student(db: Session) -> User:
    return make_student(db)


@pytest.fixture
def test_student_2(db: Session) -> User:
    return make_student(db, email="other.student@sru.edu.in", name="Olive Other")


@pytest.fixture
def test_faculty(db: Session) -> Tuple[User, FacultyProfile]:
    return make_faculty(db)


@pytest.fixture
def test_faculty_2(db: Session) -> Tuple[User, FacultyProfile]:
    return make_faculty(db, email="faculty2@sru.edu.in", name="Dr. Gus Grader", department="ECE")


@pytest.fixture
def test_booking(db: Session, test_student: User, test_faculty) -> Booking:
    _, profile = test_faculty
    return make_booking(db, test_student, profile)


@pytest.fixture
def auth_headers_student(test_student: User) -> Dict[str, str]:
    return bearer(test_student)


@pytest.fixture
def auth_headers_faculty(test_faculty) -> Dict[str, str]:
    user, _ = test_faculty
    return bearer(user)


@pytest.fixture
def auth_headers_faculty_2(test_faculty_2) -> Dict[str, str]:
    user, _ = test_faculty_2
    return bearer(user)

