"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest

from kafkaconf.config import get_settings, reload_settings
from kafkaconf.config.settings import Settings, set_toml_config


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self) -> None:
        """Settings has sensible defaults."""
        settings = Settings()
        assert settings.app_name == "kafkaconf"
        assert settings.debug is False
        assert settings.logging.level == "INFO"
        assert settings.logging.format == "json"
        assert settings.logging.redact_secrets is True

    def test_kafka_table_ignored(self) -> None:
        """The kafka table belongs to the property environment, not Settings."""
        set_toml_config({"app_name": "svc", "kafka": {"acks": "all"}})
        settings = Settings()
        assert settings.app_name == "svc"
        assert not hasattr(settings, "kafka")

    def test_init_kwargs_win(self) -> None:
        set_toml_config({"debug": False})
        assert Settings(debug=True).debug is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self, isolated_config: Path) -> None:
        (isolated_config / "default.toml").write_text("app_name = 'test'")

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.app_name == "test"

    def test_settings_cached(self, isolated_config: Path) -> None:
        (isolated_config / "default.toml").write_text("app_name = 'cached'")

        assert get_settings() is get_settings()

    def test_reload_settings_clears_cache(self, isolated_config: Path) -> None:
        default_toml = isolated_config / "default.toml"
        default_toml.write_text("app_name = 'original'")
        assert get_settings().app_name == "original"

        default_toml.write_text("app_name = 'updated'")

        assert reload_settings().app_name == "updated"


class TestEnvironmentVariableOverrides:
    """Tests for environment variable configuration overrides."""

    def test_top_level_override(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_config / "default.toml").write_text("debug = false")
        monkeypatch.setenv("KAFKACONF_DEBUG", "true")

        assert get_settings().debug is True

    def test_nested_override(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested values can be overridden with double underscore."""
        (isolated_config / "default.toml").write_text("[logging]\nlevel = 'INFO'")
        monkeypatch.setenv("KAFKACONF_LOGGING__LEVEL", "DEBUG")

        assert get_settings().logging.level == "DEBUG"
