"""Pytest configuration and shared fixtures."""

import pytest
from unittest.mock import Mock

from parpass.api.parpass_api import ParPassAPI
from parpass.config import error_aggregator
from parpass.config.settings import ConfigurationManager
from parpass.models.course import Course
from parpass.models.member import Member, Usage
from parpass.models.round import Round
from parpass.services.credential_store import MemoryCredentialStore

@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Point configuration at an empty directory and reset cached config."""
    for var in (
        "PARPASS_API_URL",
        "PARPASS_RECOMMENDATION_URL",
        "PARPASS_TIMEOUT",
        "PARPASS_TIMEZONE",
        "PARPASS_CREDENTIALS_FILE",
        "PARPASS_LOG_LEVEL",
        "PARPASS_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PARPASS_CONFIG_DIR", str(tmp_path))

    ConfigurationManager._instance = None
    error_aggregator._error_aggregator = None
    yield
    ConfigurationManager._instance = None
    error_aggregator._error_aggregator = None

@pytest.fixture
def member():
    """Core member with eight rounds a month."""
    return Member(
        id="m1",
        first_name="Sarah",
        last_name="Johnson",
        tier="core",
        monthly_rounds=8,
        parpass_code="PP100001",
        health_plan_name="Humana Gold"
    )

@pytest.fixture
def usage():
    return Usage(rounds_used=3)

@pytest.fixture
def course():
    return Course(
        id="c1",
        name="Desert Ridge",
        city="Phoenix",
        state="AZ",
        zip="85050",
        holes=18,
        tier_required="core",
        phone="602-555-0100",
        average_rating=4.3,
        review_count=12
    )

@pytest.fixture
def history(course):
    """Rounds newest first, as the history endpoint returns them."""
    return [
        Round(id="r3", checked_in_at="2024-03-20T15:00:00Z", holes_played=18,
              course_name=course.name, city="Phoenix", state="AZ", course_id=course.id),
        Round(id="r2", checked_in_at="2024-03-02T09:30:00Z", holes_played=9,
              course_name="Papago", city="Phoenix", state="AZ", course_id="c2"),
        Round(id="r1", checked_in_at="2024-02-14T10:00:00Z", holes_played=18,
              course_name=course.name, city="Phoenix", state="AZ", course_id=course.id),
    ]

@pytest.fixture
def api(member, usage):
    """ParPass API mock answering the member lookups."""
    mock = Mock(spec=ParPassAPI)
    mock.get_member_by_code.return_value = member
    mock.get_member_usage.return_value = usage
    mock.get_member_favorites.return_value = []
    mock.get_member_history.return_value = []
    return mock

@pytest.fixture
def store():
    return MemoryCredentialStore()
