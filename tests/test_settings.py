"""
tests/test_settings.py
──────────────────────
Tests for environment-driven settings and logging setup.
"""
import logging

from config import settings as settings_module
from config.settings import configure_logging, settings


class TestSettings:
    def test_env_defaults(self):
        assert settings.STALE_AFTER_HOURS == 2.0
        assert settings.COLLAPSE_THRESHOLD == 40.0

    def test_configure_logging_uses_settings_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        monkeypatch.setattr(settings_module.settings, "LOG_LEVEL", "warning")

        configure_logging()
        configure_logging("debug")

        assert calls[0]["level"] == "WARNING"
        assert calls[1]["level"] == "DEBUG"
