"""Tests for environment-driven settings."""

from decimal import Decimal

import pytest

from hr_payroll.config import DEFAULT_DATABASE_URL, Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE_URL",
        "DEBUG",
        "LOG_LEVEL",
        "SOCIAL_SECURITY_RATE",
        "SOCIAL_SECURITY_CAP",
        "OVERTIME_POLICY",
        "CREATE_TABLES",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.setattr("hr_payroll.config.load_dotenv", lambda: None)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.social_security_rate == Decimal("0.05")
        assert settings.social_security_cap == Decimal("750")
        assert settings.overtime_policy == "fixed_monthly_160"
        assert settings.debug is False
        assert settings.create_tables is False

    def test_overrides(self, clean_env):
        clean_env.setenv("SOCIAL_SECURITY_CAP", "900")
        clean_env.setenv("OVERTIME_POLICY", "daily_8x22")
        clean_env.setenv("CREATE_TABLES", "yes")
        clean_env.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings.from_env()

        assert settings.social_security_cap == Decimal("900")
        assert settings.overtime_policy == "daily_8x22"
        assert settings.create_tables is True
        assert settings.log_level == "debug"

    @pytest.mark.parametrize("raw", ["abc", "-0.01", "NaN"])
    def test_bad_rate_fails_fast(self, clean_env, raw):
        clean_env.setenv("SOCIAL_SECURITY_RATE", raw)

        with pytest.raises(ValueError, match="SOCIAL_SECURITY_RATE"):
            Settings.from_env()
