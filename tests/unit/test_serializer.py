"""
Unit tests for AttributeValueSerializer.

Tests conversion between plain Python values and DynamoDB AttributeValue format.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

import pytest

from dynspec.exceptions import DynamoSerializationError
from dynspec.serializer import AttributeValueSerializer


class Status(Enum):
    ACTIVE = "ACTIVE"


@pytest.mark.unit
class TestToDynamoValue:
    """Test single value serialization."""

    def setup_method(self) -> None:
        """Create a fresh serializer for each test."""
        self.serializer = AttributeValueSerializer()

    def test_string(self) -> None:
        assert self.serializer.to_dynamo_value("test") == {"S": "test"}

    def test_integer(self) -> None:
        assert self.serializer.to_dynamo_value(25) == {"N": "25"}

    def test_float_to_decimal(self) -> None:
        """Floats go through str so no binary artifacts leak into the number."""
        assert self.serializer.to_dynamo_value(0.1) == {"N": "0.1"}

    def test_boolean(self) -> None:
        assert self.serializer.to_dynamo_value(True) == {"BOOL": True}

    def test_none(self) -> None:
        assert self.serializer.to_dynamo_value(None) == {"NULL": True}

    def test_utc_datetime_uses_z_suffix(self) -> None:
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert self.serializer.to_dynamo_value(value) == {"S": "2024-01-02T03:04:05Z"}

    def test_naive_datetime(self) -> None:
        assert self.serializer.to_dynamo_value(datetime(2024, 1, 2, 3, 4)) == {
            "S": "2024-01-02T03:04:00"
        }

    def test_date(self) -> None:
        assert self.serializer.to_dynamo_value(date(2024, 1, 2)) == {"S": "2024-01-02"}

    def test_uuid(self) -> None:
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert self.serializer.to_dynamo_value(value) == {
            "S": "12345678-1234-5678-1234-567812345678"
        }

    def test_enum(self) -> None:
        assert self.serializer.to_dynamo_value(Status.ACTIVE) == {"S": "ACTIVE"}

    def test_tuple_becomes_list(self) -> None:
        assert self.serializer.to_dynamo_value((1, "a")) == {"L": [{"N": "1"}, {"S": "a"}]}

    def test_string_set(self) -> None:
        assert self.serializer.to_dynamo_value({"a"}) == {"SS": ["a"]}

    def test_empty_set_rejected(self) -> None:
        """DynamoDB has no empty set type."""
        with pytest.raises(DynamoSerializationError, match="Empty sets"):
            self.serializer.to_dynamo_value(set())

    def test_nested_empty_set_names_attribute(self) -> None:
        with pytest.raises(DynamoSerializationError, match="'tags'"):
            self.serializer.to_dynamo({"tags": frozenset()})

    def test_unsupported_type(self) -> None:
        with pytest.raises(DynamoSerializationError) as exc_info:
            self.serializer.to_dynamo_value(object())
        assert isinstance(exc_info.value.original_error, TypeError)


@pytest.mark.unit
class TestToDynamo:
    """Test mapping serialization."""

    def setup_method(self) -> None:
        self.serializer = AttributeValueSerializer()

    def test_key_mapping(self) -> None:
        result = self.serializer.to_dynamo({"pk": "user#1", "sk": 3, "score": 95.5})
        assert result == {"pk": {"S": "user#1"}, "sk": {"N": "3"}, "score": {"N": "95.5"}}

    def test_nested(self) -> None:
        result = self.serializer.to_dynamo({"user": {"name": "Alice", "score": 1.5}})
        assert result == {"user": {"M": {"name": {"S": "Alice"}, "score": {"N": "1.5"}}}}

    def test_error_names_attribute(self) -> None:
        with pytest.raises(DynamoSerializationError, match="'bad'"):
            self.serializer.to_dynamo({"ok": 1, "bad": object()})


@pytest.mark.unit
class TestFromDynamo:
    """Test deserialization from AttributeValue format."""

    def setup_method(self) -> None:
        self.serializer = AttributeValueSerializer()

    def test_whole_number_to_int(self) -> None:
        result = self.serializer.from_dynamo({"age": {"N": "25"}})
        assert result == {"age": 25}
        assert isinstance(result["age"], int)

    def test_fraction_to_float(self) -> None:
        result = self.serializer.from_dynamo({"score": {"N": "95.5"}})
        assert isinstance(result["score"], float)

    def test_nested(self) -> None:
        item: dict[str, Any] = {"user": {"M": {"name": {"S": "Alice"}, "n": {"N": "2"}}}}
        assert self.serializer.from_dynamo(item) == {"user": {"name": "Alice", "n": 2}}

    def test_list(self) -> None:
        item: dict[str, Any] = {"tags": {"L": [{"S": "a"}, {"N": "1"}]}}
        assert self.serializer.from_dynamo(item) == {"tags": ["a", 1]}

    def test_single_value(self) -> None:
        assert self.serializer.from_dynamo_value({"N": "1.25"}) == 1.25

    def test_decimal_input_passes_through(self) -> None:
        assert self.serializer.to_dynamo_value(Decimal("3.50")) == {"N": "3.50"}
