"""Exception hierarchy for kafkaconf.

Property resolution itself never fails; these are raised only when a typed
property (such as the health timeout) cannot be bound.
"""

from typing import Any


class KafkaConfError(Exception):
    """Base exception for all kafkaconf errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PropertyConversionError(KafkaConfError):
    """Raised when a configured value cannot be converted to its bound type."""

    def __init__(self, key: str, value: Any, target_type: type) -> None:
        super().__init__(
            f"Cannot convert property '{key}' value {value!r} to {target_type.__name__}"
        )
        self.key = key
        self.value = value
        self.target_type = target_type
