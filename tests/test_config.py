"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from expense_tracker.config import AppSettings, DatabaseSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPENSES_DB_URL", raising=False)
        monkeypatch.delenv("EXPENSES_LOG_LEVEL", raising=False)
        assert DatabaseSettings().url == "sqlite:///expenses.db"
        assert DatabaseSettings().echo is False
        assert AppSettings().log_level == "WARNING"
    
    def test_database_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_DB_URL", "postgresql+psycopg://localhost/expenses")
        assert get_settings().database.url == "postgresql+psycopg://localhost/expenses"
    
    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_LOG_LEVEL", " debug ")
        assert get_settings().app.log_level == "DEBUG"
    
    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings()
    
    def test_settings_are_cached(self):
        assert get_settings() is get_settings()
