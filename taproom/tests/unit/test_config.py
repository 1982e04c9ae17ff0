"""Company timezone configuration defaults."""
import pytest

from taproom.config import FALLBACK_TIMEZONE, Settings, get_settings
from taproom.time_utils import company_tz


@pytest.mark.unit
def test_company_tz_returns_default_timezone():
    """company_tz() returns ZoneInfo for the configured default timezone (e.g. America/Denver)."""
    zone = company_tz()
    assert zone.key == get_settings().default_timezone


@pytest.mark.unit
def test_default_timezone_from_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEZONE", "America/Chicago")
    assert Settings().default_timezone == "America/Chicago"


@pytest.mark.unit
def test_default_timezone_fallback_value(monkeypatch):
    monkeypatch.delenv("DEFAULT_TIMEZONE", raising=False)
    assert Settings(_env_file=None).default_timezone == FALLBACK_TIMEZONE


@pytest.mark.unit
def test_plain_postgres_url_is_converted(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/taproom")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/taproom"
