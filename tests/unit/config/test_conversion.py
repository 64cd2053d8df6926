"""Unit tests for the configuration ConversionService."""

from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path

import pytest

from kafkaconf.config.conversion import ConversionService, parse_duration


class Compression(Enum):
    GZIP = "gzip"


@pytest.fixture
def service() -> ConversionService:
    return ConversionService()


class TestCanConvert:
    """Tests for can_convert."""

    @pytest.mark.parametrize("source_type", [str, int, float, bool, Decimal, Compression, list])
    def test_scalars_convert_to_str(self, service: ConversionService, source_type: type) -> None:
        assert service.can_convert(source_type, str) is True

    def test_dict_not_convertible(self, service: ConversionService) -> None:
        assert service.can_convert(dict, str) is False

    def test_unknown_target(self, service: ConversionService) -> None:
        assert service.can_convert(str, bytes) is False


class TestConvertToStr:
    """Tests for conversion to text."""

    def test_booleans_are_lowercase(self, service: ConversionService) -> None:
        assert service.convert(True, str) == "true"
        assert service.convert(False, str) == "false"

    def test_numbers(self, service: ConversionService) -> None:
        assert service.convert(42, str) == "42"
        assert service.convert(1.5, str) == "1.5"
        assert service.convert(Decimal("0.25"), str) == "0.25"

    def test_enum_uses_member_name(self, service: ConversionService) -> None:
        assert service.convert(Compression.GZIP, str) == "GZIP"

    def test_path(self, service: ConversionService) -> None:
        assert service.convert(Path("/etc/kafka/ca.pem"), str) == "/etc/kafka/ca.pem"

    def test_sequences_are_comma_joined(self, service: ConversionService) -> None:
        assert service.convert(["a:9092", "b:9092"], str) == "a:9092,b:9092"
        assert service.convert((1, True), str) == "1,true"

    def test_sets_are_joined_in_sorted_order(self, service: ConversionService) -> None:
        """Unordered collections render the same on every run."""
        servers = {"c:9092", "a:9092", "b:9092"}
        assert service.convert(servers, str) == "a:9092,b:9092,c:9092"
        assert service.convert(frozenset(servers), str) == "a:9092,b:9092,c:9092"

    def test_sequence_with_nested_values_not_converted(self, service: ConversionService) -> None:
        assert service.convert([{"a": 1}], str) is None

    def test_none_not_converted(self, service: ConversionService) -> None:
        assert service.convert(None, str) is None


class TestConvertToTimedelta:
    """Tests for duration conversion."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("500ms", timedelta(milliseconds=500)),
            ("10s", timedelta(seconds=10)),
            ("2m", timedelta(minutes=2)),
            ("1h", timedelta(hours=1)),
            ("1d", timedelta(days=1)),
            ("7", timedelta(seconds=7)),
            ("PT10S", timedelta(seconds=10)),
            ("PT1M30S", timedelta(seconds=90)),
            ("P1DT2H", timedelta(days=1, hours=2)),
        ],
    )
    def test_parse_duration(self, text: str, expected: timedelta) -> None:
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["soon", "10 parsecs", "P", "PT", "P1DT", "PT1H2", ""])
    def test_parse_duration_invalid(self, text: str) -> None:
        assert parse_duration(text) is None

    @pytest.mark.parametrize("text", ["99999999999d", "P99999999999D", "1" + "0" * 400])
    def test_parse_duration_out_of_range(self, text: str) -> None:
        assert parse_duration(text) is None

    def test_out_of_range_number_not_converted(self, service: ConversionService) -> None:
        assert service.convert(10**400, timedelta) is None
        assert service.convert(float("nan"), timedelta) is None

    def test_numbers_are_seconds(self, service: ConversionService) -> None:
        assert service.convert(3, timedelta) == timedelta(seconds=3)
        assert service.convert(0.5, timedelta) == timedelta(milliseconds=500)

    def test_timedelta_passthrough(self, service: ConversionService) -> None:
        value = timedelta(seconds=4)
        assert service.convert(value, timedelta) is value

    def test_bool_not_a_duration(self, service: ConversionService) -> None:
        assert service.convert(True, timedelta) is None
