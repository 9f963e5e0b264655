"""
Pytest configuration and fixtures for unit tests.

Unit tests are fast, isolated tests that don't require external dependencies.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from services.auth import Principal


@pytest.fixture
def mock_cursor():
    """Mock database cursor."""
    cursor = Mock()
    cursor.rowcount = 1
    return cursor


@pytest.fixture
def mock_database(mock_cursor):
    """Mock database whose get_cursor() yields mock_cursor."""
    db = Mock()
    db.get_cursor.return_value.__enter__ = Mock(return_value=mock_cursor)
    db.get_cursor.return_value.__exit__ = Mock(return_value=False)
    return db


@pytest.fixture
def admin_capability():
    """Admin capability for privileged service calls."""
    return Principal(user_id=1, role="admin").admin_capability()


@pytest.fixture
def now():
    """Fixed reference time for recency scoring."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_profile():
    """Sample job seeker profile."""
    return {
        "user_id": 7,
        "full_name": "Jane Seeker",
        "skills": ["react", "node"],
        "experience_level": "mid-level",
        "location": "Austin",
    }


@pytest.fixture
def sample_jobs(now):
    """Sample active job postings."""
    return [
        {
            "id": "job-react",
            "title": "Frontend Engineer",
            "skills_required": ["React", "TypeScript"],
            "experience_level": "mid-level",
            "location": "Austin, TX",
            "is_remote": False,
            "created_at": now,
            "company_name": "Acme",
        },
        {
            "id": "job-cobol",
            "title": "Mainframe Developer",
            "skills_required": ["cobol", "jcl"],
            "experience_level": "executive",
            "location": "Berlin",
            "is_remote": False,
            "created_at": now - timedelta(days=60),
            "company_name": "Legacy Corp",
        },
        {
            "id": "job-remote-node",
            "title": "Backend Engineer",
            "skills_required": ["Node.js"],
            "experience_level": "senior",
            "location": "Anywhere",
            "is_remote": True,
            "created_at": now - timedelta(days=3),
            "company_name": "Remote Inc",
        },
    ]
