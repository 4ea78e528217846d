"""
Pytest configuration and shared fixtures for the Resume Builder tests.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Resume, User  # noqa: F401


# Test Database Setup
@pytest.fixture
def test_db_engine():
    """Create a fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_db_session(test_db_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def test_client(test_db_session):
    """Create a test client with overridden database dependency."""
    def override_get_db():
        yield test_db_session

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def test_settings(monkeypatch, tmp_path):
    """Point settings at test values for every test."""
    monkeypatch.setattr(settings, "SECRET_KEY", "test-secret-key-for-jwt-tokens-1234567890")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setattr(settings, "IMAGEKIT_PRIVATE_KEY", "private_test_key")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    return settings


# User Fixtures
@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "name": "Test User",
        "email": "test@example.com",
        "password": "testpassword123",
    }


@pytest.fixture
def register_user(test_client):
    """Register a user through the API and return (token, user)."""
    def _register(name="Test User", email="test@example.com", password="testpassword123"):
        response = test_client.post(
            "/api/users/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Authentication headers for the default test user."""
    token, _ = register_user()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(register_user):
    """Authentication headers for a second, unrelated user."""
    token, _ = register_user(name="Other User", email="other@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_resume(test_client):
    """Create a resume through the API and return its JSON."""
    def _create(headers, title="Draft"):
        response = test_client.post("/api/resumes/create", json={"title": title}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["resume"]

    return _create


# Resume Test Data Fixtures
@pytest.fixture
def sample_resume_data():
    """A complete resumeData payload."""
    return {
        "title": "Backend Engineer",
        "template": "modern",
        "accent_color": "#10b981",
        "professional_summary": "Engineer who ships reliable APIs.",
        "skills": ["Python", "SQL"],
        "personal_info": {
            "image": "",
            "full_name": "Jane Doe",
            "profession": "Backend Engineer",
            "email": "jane@example.com",
            "phone": "+1 555 0101",
            "location": "Denver, CO",
            "linkedin": "",
            "website": "",
        },
        "experience": [
            {
                "company": "Acme",
                "position": "Engineer",
                "start_date": "2021-01",
                "end_date": "",
                "description": "Built things.",
                "is_current": True,
            }
        ],
        "projects": [{"name": "toolkit", "type": "OSS", "description": "Handy tools."}],
        "education": [
            {
                "institution": "State University",
                "degree": "B.S.",
                "field": "Computer Science",
                "graduation_date": "2020-05",
                "gpa": "3.8",
            }
        ],
    }


# External API Mocks
@pytest.fixture
def mock_gemini():
    """Mock the Gemini model; set .generate_content.return_value.text per test."""
    with patch("app.services.ai_relay.genai.configure"), \
         patch("app.services.ai_relay.genai.GenerativeModel") as mock_model_cls:
        mock_model = Mock()
        mock_model.generate_content.return_value = Mock(text="Enhanced text.")
        mock_model_cls.return_value = mock_model
        yield mock_model
