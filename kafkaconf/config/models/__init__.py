"""Configuration model exports.

    from kafkaconf.config.models import LoggingConfig
"""

from kafkaconf.config.models.observability import LogFormat, LoggingConfig, LogLevel

__all__ = ["LogFormat", "LogLevel", "LoggingConfig"]
