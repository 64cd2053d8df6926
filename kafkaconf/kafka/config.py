"""Default Kafka client configuration.

The default configuration applies to both consumers and producers, which may
override it in their own sections. It is resolved from every property under
the `kafka` prefix except the sibling sections, with values stringified so the
result can be handed straight to a Kafka client.
"""

from datetime import timedelta
from typing import Any

from kafkaconf.config.conversion import DEFAULT_CONVERSION_SERVICE, ConversionService
from kafkaconf.config.environment import Environment
from kafkaconf.exceptions import PropertyConversionError
from kafkaconf.observability.logging import get_logger

logger = get_logger(__name__)

BOOTSTRAP_SERVERS_CONFIG = "bootstrap.servers"

# Matched with str.startswith, so "embeddedFoo" is excluded as well
RESERVED_SECTIONS: tuple[str, ...] = ("embedded", "consumers", "producers", "streams")

HEALTH_TIMEOUT_KEYS: tuple[str, ...] = (
    "health-timeout",
    "health.timeout",
    "health_timeout",
    "healthTimeout",
)


class AbstractKafkaConfiguration:
    """Base for Kafka configurations that own a client property set."""

    PREFIX = "kafka"
    DEFAULT_BOOTSTRAP_SERVERS = "localhost:9092"

    def __init__(self, config: dict[str, str]) -> None:
        self._config = config

    @property
    def config(self) -> dict[str, str]:
        """The client properties."""
        return self._config


def resolve_default_configuration(
    environment: Environment,
    conversion_service: ConversionService = DEFAULT_CONVERSION_SERVICE,
) -> dict[str, str]:
    """Resolve the default client properties from the environment.

    Reserved sibling sections are dropped, None values are skipped, and every
    other value is converted to text, falling back to str() when the
    conversion service cannot handle it.
    """
    values = environment.get_properties(AbstractKafkaConfiguration.PREFIX)
    properties: dict[str, str] = {}
    excluded: list[str] = []

    for key, value in values.items():
        if key.startswith(RESERVED_SECTIONS):
            excluded.append(key)
            continue
        if value is None:
            continue

        text: Any = None
        if conversion_service.can_convert(type(value), str):
            text = conversion_service.convert(value, str)
        properties[key] = text if text is not None else str(value)

    logger.debug(
        "kafka_properties_resolved",
        keys=sorted(properties),
        excluded=len(excluded),
    )
    return properties


class KafkaDefaultConfiguration(AbstractKafkaConfiguration):
    """Kafka configuration applied to both consumers and producers."""

    DEFAULT_HEALTH_TIMEOUT = timedelta(seconds=10)

    def __init__(
        self,
        environment: Environment,
        conversion_service: ConversionService = DEFAULT_CONVERSION_SERVICE,
    ) -> None:
        super().__init__(resolve_default_configuration(environment, conversion_service))
        if BOOTSTRAP_SERVERS_CONFIG not in self.config:
            logger.info(
                "kafka_bootstrap_servers_defaulted",
                bootstrap_servers=self.DEFAULT_BOOTSTRAP_SERVERS,
            )
        self.config.setdefault(BOOTSTRAP_SERVERS_CONFIG, self.DEFAULT_BOOTSTRAP_SERVERS)

        self._health_timeout = self.DEFAULT_HEALTH_TIMEOUT
        self._bind_health_timeout(environment, conversion_service)

    @property
    def health_timeout(self) -> timedelta:
        """The health check timeout. Defaults to 10 seconds."""
        return self._health_timeout

    @health_timeout.setter
    def health_timeout(self, value: timedelta | None) -> None:
        # None leaves the current value in place
        if value is not None:
            self._health_timeout = value

    def _bind_health_timeout(
        self,
        environment: Environment,
        conversion_service: ConversionService,
    ) -> None:
        found = environment.find_property(
            [f"{self.PREFIX}.{key}" for key in HEALTH_TIMEOUT_KEYS]
        )
        if found is None or found[1] is None:
            return
        name, raw = found
        converted = conversion_service.convert(raw, timedelta)
        if converted is None:
            logger.error("kafka_health_timeout_invalid", key=name, value=raw)
            raise PropertyConversionError(name, raw, timedelta)
        self.health_timeout = converted

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bootstrap_servers={self.config[BOOTSTRAP_SERVERS_CONFIG]!r}, "
            f"health_timeout={self.health_timeout!r})"
        )
