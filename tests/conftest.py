# ---------- SHARED FIXTURES ----------

import pytest

from skillpath.config import settings
from skillpath.utils.local_store import KeyValueStore


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    """Run every test without OpenAI credentials, remote store or uploads bucket."""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    monkeypatch.setattr(settings, "PROFILE_STORE_MODE", "local")
    monkeypatch.setattr(settings, "S3_UPLOADS_BUCKET", None)
    monkeypatch.setattr(settings, "SHARE_ORIGIN", "https://skillpath.example")


@pytest.fixture
def local_store():
    """In-memory scoped key-value store."""
    return KeyValueStore()


@pytest.fixture
def background_profile():
    """Profile fields as merged by a valid background form."""
    return {
        "full_name": "Aisyah Rahman",
        "age": 29,
        "job_title": "Engineer",
        "position_department": "Engineering",
        "current_responsibilities": "Build and maintain batch pipelines",
        "industry_type": "Technology",
        "company_size": "Medium",
        "years_of_experience": 5,
        "current_salary": 5000,
        "currency": "MYR",
        "country": "Malaysia",
        "city_state": "Kuala Lumpur",
        "current_skills": ["Python", "SQL"],
    }
