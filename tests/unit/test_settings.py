"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "API_KEYS",
    "MAX_PLAN_WEEKS",
    "DEFAULT_PLAN_WEEKS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.is_development

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_key is None

    def test_plan_week_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.max_plan_weeks == 6
        assert settings.default_plan_weeks == 4

    def test_session_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.session_ttl_seconds == 3600
        assert settings.max_sessions == 1000

    def test_jwt_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.jwt_secret == "workout-builder-jwt-secret-change-in-production"
        assert settings.jwt_issuer == "workout-builder"


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test that Settings reads environment variables."""

    def test_reads_plan_weeks(self, clean_env, monkeypatch):
        monkeypatch.setenv("MAX_PLAN_WEEKS", "8")
        monkeypatch.setenv("DEFAULT_PLAN_WEEKS", "5")
        settings = Settings(_env_file=None)
        assert settings.max_plan_weeks == 8
        assert settings.default_plan_weeks == 5

    def test_service_role_key_preferred(self, clean_env, monkeypatch):
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
        assert Settings(_env_file=None).supabase_key == "service"

    def test_api_keys_list(self, clean_env, monkeypatch):
        monkeypatch.setenv("API_KEYS", " sk_a , ,sk_b")
        assert Settings(_env_file=None).api_keys_list == ["sk_a", "sk_b"]


@pytest.mark.unit
class TestSettingsValidation:

    def test_environment_normalized(self, clean_env):
        assert Settings(environment="PRODUCTION", _env_file=None).is_production

    def test_invalid_environment(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(environment="qa", _env_file=None)

    def test_log_level_uppercased(self, clean_env):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty", _env_file=None)

    def test_default_weeks_cannot_exceed_max(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(max_plan_weeks=3, default_plan_weeks=4, _env_file=None)


@pytest.mark.unit
def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
