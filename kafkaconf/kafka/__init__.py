"""Kafka client configuration."""

from kafkaconf.kafka.config import (
    BOOTSTRAP_SERVERS_CONFIG,
    AbstractKafkaConfiguration,
    KafkaDefaultConfiguration,
    resolve_default_configuration,
)

__all__ = [
    "BOOTSTRAP_SERVERS_CONFIG",
    "AbstractKafkaConfiguration",
    "KafkaDefaultConfiguration",
    "resolve_default_configuration",
]
