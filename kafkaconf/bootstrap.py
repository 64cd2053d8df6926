"""Bootstrap module for one-call kafkaconf setup.

Handles:
- Loading settings and TOML configuration
- Configuring structured logging
- Building the property Environment from TOML and environment variables
- Creating the default Kafka configuration

Example usage:

    from kafkaconf.bootstrap import bootstrap

    kafka_config = bootstrap()
    producer = Producer(kafka_config.config)
"""

from collections.abc import Mapping
from pathlib import Path

from kafkaconf.config.environment import Environment
from kafkaconf.config.loader import load_config
from kafkaconf.config.settings import Settings, set_toml_config
from kafkaconf.kafka.config import AbstractKafkaConfiguration, KafkaDefaultConfiguration
from kafkaconf.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def bootstrap(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    require_kafka: bool = False,
) -> KafkaDefaultConfiguration | None:
    """Load configuration and build the default Kafka configuration.

    Args:
        config_dir: Directory holding default.toml (default: discovered)
        environ: Environment variables to read, for both KAFKA_* properties and
            KAFKACONF_CONFIG_DIR / KAFKACONF_ENV (default: os.environ)
        require_kafka: Return None unless something is configured under `kafka`

    Returns:
        The default Kafka configuration, or None when require_kafka is set and
        no Kafka properties exist
    """
    config_dict = load_config(config_dir, environ)
    set_toml_config(config_dict)
    settings = Settings()

    setup_logging(
        level=settings.logging.level,
        format=settings.logging.format,
        redact_secrets=settings.logging.redact_secrets,
    )

    environment = Environment.from_config(config_dict, environ)
    if require_kafka and not environment.contains_properties(AbstractKafkaConfiguration.PREFIX):
        logger.info("kafka_not_configured", app_name=settings.app_name)
        return None

    kafka_config = KafkaDefaultConfiguration(environment)
    logger.info(
        "kafka_configuration_ready",
        app_name=settings.app_name,
        properties=len(kafka_config.config),
        health_timeout_seconds=kafka_config.health_timeout.total_seconds(),
    )
    return kafka_config
