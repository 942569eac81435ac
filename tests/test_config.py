"""Unit tests for the config module."""

from pydantic import ValidationError
import pytest

from lexsearch.config import Settings


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_values_come_from_the_test_environment(self):
        settings = Settings()

        assert settings.store_backend == "memory"
        assert settings.is_memory_backend() is True
        assert settings.default_search_limit == 10
        assert settings.search_set_suffix == "-search"
        assert settings.log_json is False

    def test_field_defaults(self, monkeypatch):
        for key in ("STORE_BACKEND", "REDIS_HOST", "LOG_JSON", "SERVICE_NAME"):
            monkeypatch.delenv(key)

        settings = Settings(_env_file=None)

        assert settings.store_backend == "redis"
        assert settings.redis_host == ""
        assert settings.redis_password is None
        assert settings.log_json is True
        assert settings.service_name == "lexsearch"
        assert settings.metrics_group_label is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "redis")
        monkeypatch.setenv("REDIS_HOST", "cache.internal")
        monkeypatch.setenv("REDIS_PORT", "6380")
        monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
        monkeypatch.setenv("DEFAULT_SEARCH_LIMIT", "25")

        settings = Settings()

        assert settings.is_memory_backend() is False
        assert settings.redis_port == 6380
        assert settings.redis_password == "s3cret"
        assert settings.default_search_limit == 25

    def test_redis_target_omits_password(self):
        settings = Settings(redis_host="cache.internal", redis_port=6380, redis_db=3, redis_password="s3cret")

        assert settings.redis_target() == "cache.internal:6380/3"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"redis_port": 70000},
            {"redis_port": 0},
            {"redis_db": -1},
            {"default_search_limit": -1},
            {"search_set_suffix": ""},
            {"store_backend": "sqlite"},
        ],
    )
    def test_invalid_values_are_rejected(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)
