"""Unit tests for configuration Pydantic models."""

import pytest
from pydantic import ValidationError

from kafkaconf.config.models import LoggingConfig


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "json"
        assert config.redact_secrets is True

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")
