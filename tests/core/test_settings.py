# tests/core/test_settings.py
"""Tests for application settings."""

from farm_ledger.core.settings import DEV_SECRET_KEY, Settings


def test_defaults(monkeypatch) -> None:
    for name in ("JWT_SECRET", "BCRYPT_ROUNDS", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    config = Settings(_env_file=None)

    assert config.port == 5001
    assert config.database_url == "sqlite:///./farm.db"
    assert config.bcrypt_rounds == 12
    assert config.access_token_expire_minutes == 24 * 60
    assert config.rate_limits == {"auth": 5, "general": 100}
    assert config.rate_limit_window_seconds == 900
    assert config.totp_issuer == "FarmApp"
    assert config.uses_development_secret is True
    assert config.secret_key == DEV_SECRET_KEY


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("AUTH_RATE_LIMIT_MAX", "10")
    monkeypatch.setenv("JWT_SECRET", "production-secret")
    config = Settings(_env_file=None)

    assert config.auth_rate_limit_max == 10
    assert config.uses_development_secret is False
