"""Layered property sources with prefix-scoped lookup.

An Environment holds an ordered list of PropertySources. Nested mappings are
flattened to dotted keys, so the TOML table

    [kafka]
    bootstrap.servers = "broker:9092"
    [kafka.producers.default]
    acks = "all"

yields `kafka.bootstrap.servers` and `kafka.producers.default.acks`.
Environment variables are mapped the same way: `KAFKA_BOOTSTRAP_SERVERS`
becomes `kafka.bootstrap.servers`.
"""

import os
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from kafkaconf.observability.logging import get_logger

logger = get_logger(__name__)

TOML_SOURCE_ORDER = 0
ENVIRONMENT_VARIABLES_ORDER = 100
INIT_SOURCE_ORDER = 200


def flatten(properties: Mapping[str, Any], parent: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (dotted_key, value) pairs for every leaf of a nested mapping."""
    for key, value in properties.items():
        dotted = f"{parent}.{key}" if parent else str(key)
        if isinstance(value, Mapping):
            yield from flatten(value, dotted)
        else:
            yield dotted, value


def normalize_env_var_name(name: str) -> str:
    """Map an environment variable name to a dotted property key."""
    return name.lower().replace("_", ".")


@dataclass
class PropertySource:
    """A named set of properties. Higher `order` wins on key conflicts."""

    name: str
    properties: dict[str, Any] = field(default_factory=dict)
    order: int = TOML_SOURCE_ORDER

    def __post_init__(self) -> None:
        self.properties = dict(flatten(self.properties))

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        order: int = ENVIRONMENT_VARIABLES_ORDER,
    ) -> "PropertySource":
        """Build a source from process environment variables."""
        if environ is None:
            environ = os.environ
        properties = {normalize_env_var_name(name): value for name, value in environ.items()}
        return cls(name="env", properties=properties, order=order)


class Environment:
    """Ordered collection of property sources."""

    def __init__(self, sources: list[PropertySource] | None = None) -> None:
        self._sources: list[PropertySource] = []
        for source in sources or []:
            self.add_property_source(source)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        environ: Mapping[str, str] | None = None,
    ) -> "Environment":
        """Build an environment from loaded TOML config plus environment variables."""
        return cls(
            [
                PropertySource(name="toml", properties=dict(config)),
                PropertySource.from_environ(environ),
            ]
        )

    @property
    def property_sources(self) -> list[PropertySource]:
        return list(self._sources)

    def add_property_source(self, source: PropertySource) -> "Environment":
        self._sources.append(source)
        # Stable sort keeps insertion order for equal `order` values
        self._sources.sort(key=lambda s: s.order)
        logger.debug(
            "property_source_added",
            source=source.name,
            order=source.order,
            keys=len(source.properties),
        )
        return self

    def get_property(self, key: str, default: Any = None) -> Any:
        for source in reversed(self._sources):
            if key in source.properties:
                return source.properties[key]
        return default

    def find_property(self, keys: Sequence[str]) -> tuple[str, Any] | None:
        """Look up a property that may be spelled several ways.

        The highest-order source defining any of `keys` wins; within one
        source, earlier keys win. Returns the matching (key, value) or None.
        """
        for source in reversed(self._sources):
            for key in keys:
                if key in source.properties:
                    return key, source.properties[key]
        return None

    def contains_properties(self, prefix: str) -> bool:
        """Check whether any property lives under `prefix`."""
        scope = f"{prefix}."
        return any(
            key.startswith(scope) for source in self._sources for key in source.properties
        )

    def get_properties(self, prefix: str) -> dict[str, Any]:
        """Return every property under `prefix`, keyed relative to it.

        Lower-order sources are applied first so later ones overwrite them.
        The returned dict is a new object; sources are not modified.
        """
        scope = f"{prefix}."
        result: dict[str, Any] = {}
        for source in self._sources:
            for key, value in source.properties.items():
                if key.startswith(scope):
                    result[key[len(scope):]] = value
        return result
