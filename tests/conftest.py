"""Pytest configuration and fixtures."""

import pytest
import sys
import os

# Add the parent directory to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from resume_studio import create_app, db as app_db
from resume_studio.middleware.identity import Identity, issue_identity_token
from resume_studio.schemas.resume_document_schema import ResumeDocument
from config.testing import TestingConfig


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external services")
    config.addinivalue_line("markers", "integration: tests going through the HTTP API")


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app(config=TestingConfig)
    return app


@pytest.fixture(scope="function")
def client(app):
    """Flask test client."""
    client = app.test_client()
    with app.app_context():
        yield client


@pytest.fixture(scope="function")
def db(app):
    """Database session for testing."""
    with app.app_context():
        # Create all tables
        app_db.create_all()
        yield app_db
        # Drop all tables
        app_db.session.remove()
        app_db.drop_all()


@pytest.fixture
def identity():
    return Identity(email="jane.doe@example.com", name="Jane Doe", picture="https://example.com/jane.png")


@pytest.fixture
def auth_headers(identity):
    """Bearer token as the OAuth front end would send it."""
    token = issue_identity_token(identity, TestingConfig.AUTH_TOKEN_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def resume_payload():
    """A filled-in document in wire (camelCase) form."""
    return {
        "personalInfo": {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane.doe@example.com",
            "phone": "+1 555 0100",
            "location": "Berlin",
            "linkedinUrl": "https://linkedin.com/in/janedoe",
            "summary": "Backend engineer focused on reliable data systems.",
        },
        "experience": [
            {
                "id": "exp-1",
                "company": "Acme Corp",
                "position": "Senior Engineer",
                "location": "Berlin",
                "startDate": "2021-03",
                "endDate": "",
                "isCurrent": True,
                "description": "Leads the payments platform team.",
                "achievements": ["Cut settlement time by 40%"],
            },
            {
                "id": "exp-2",
                "company": "Globex",
                "position": "Engineer",
                "location": "Hamburg",
                "startDate": "2018-01",
                "endDate": "2021-02",
                "isCurrent": False,
                "description": "Built internal reporting tools.",
                "achievements": [],
            },
        ],
        "education": [
            {
                "id": "edu-1",
                "institution": "TU Berlin",
                "degree": "BSc",
                "field": "Computer Science",
                "startDate": "2014-10",
                "endDate": "2018-09",
                "gpa": "3.8",
                "description": "",
            }
        ],
        "skills": [
            {"id": "skill-1", "name": "Python", "level": "expert"},
            {"id": "skill-2", "name": "PostgreSQL", "level": "advanced"},
        ],
        "projects": [
            {
                "id": "proj-1",
                "name": "Ledger",
                "description": "Double-entry bookkeeping library.",
                "technologies": "Python, SQLAlchemy",
                "link": "https://github.com/janedoe/ledger",
                "startDate": "2020-05",
                "endDate": "2020-11",
            }
        ],
        "certifications": [],
    }


@pytest.fixture
def resume_document(resume_payload):
    return ResumeDocument.model_validate(resume_payload)
