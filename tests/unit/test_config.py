"""環境変数からの設定読み込みテスト。"""

import logging

import pytest

from backend.config import Settings, configure_logging, get_settings, load_settings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("TIMESHEET_DB_PATH", raising=False)
    monkeypatch.delenv("TIMESHEET_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings() == Settings(db_path="data/timesheet.db", log_level="INFO")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TIMESHEET_DB_PATH", "/tmp/ts.db")
        monkeypatch.setenv("TIMESHEET_LOG_LEVEL", " debug ")
        settings = load_settings()
        assert settings.db_path == "/tmp/ts.db"
        assert settings.log_level == "DEBUG"

    def test_empty_db_path_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("TIMESHEET_DB_PATH", "")
        assert load_settings().db_path == "data/timesheet.db"

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("TIMESHEET_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="LOUD"):
            load_settings()

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TIMESHEET_DB_PATH", "other.db")
        assert get_settings() is first


def test_configure_logging_does_not_raise():
    configure_logging(Settings(log_level="WARNING"))
    assert logging.getLogger().handlers
