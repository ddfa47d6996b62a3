from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, cast
from uuid import UUID

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from .exceptions import DynamoSerializationError


class AttributeValueSerializer:
    """
    Converts between plain Python values and DynamoDB AttributeValue dicts.

    Architectural Note:
    -------------------
    Boto3's TypeSerializer rejects floats and knows nothing about dates,
    UUIDs or enums. Values are normalized first (float -> Decimal, temporal
    types -> ISO 8601, UUID -> str, Enum -> value) and only then handed to
    boto3. On the way back Decimals are narrowed to int or float.
    """

    def __init__(self) -> None:
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def to_dynamo(self, data: dict[str, Any]) -> dict[str, dict[str, Any]]:
        """Converts a mapping of attribute name -> value to AttributeValue format."""
        result = {}
        for name, value in data.items():
            try:
                result[name] = self.to_dynamo_value(value)
            except DynamoSerializationError as e:
                raise DynamoSerializationError(
                    f"Failed to serialize attribute '{name}'. value={value!r}",
                    original_error=e.original_error,
                ) from e
        return result

    def to_dynamo_value(self, value: Any) -> dict[str, Any]:
        """
        Serializes a single value.
        E.g.: 10.5 -> {'N': '10.5'}, "ACTIVE" -> {'S': 'ACTIVE'}
        """
        clean_value = self._prepare(value)
        try:
            return cast(dict[str, Any], self._serializer.serialize(clean_value))
        except TypeError as e:
            raise DynamoSerializationError(
                f"Failed to serialize value {value!r}. error={e!s}", original_error=e
            ) from e

    def from_dynamo(self, item: dict[str, Any]) -> dict[str, Any]:
        """Converts an AttributeValue mapping back to a plain Python dict."""
        return {name: self.from_dynamo_value(value) for name, value in item.items()}

    def from_dynamo_value(self, value: dict[str, Any]) -> Any:
        return self._restore(self._deserializer.deserialize(value))

    def _prepare(self, value: Any) -> Any:
        """
        Recursively prepares a value for boto3 TypeSerializer.

        Converts:
        - float -> Decimal
        - datetime -> ISO 8601 string, "Z" suffix for UTC
        - date -> ISO 8601 string
        - UUID -> string
        - Enum -> value
        - tuple -> list
        - set/frozenset -> set of prepared members (SS/NS/BS)

        An empty set has no DynamoDB representation (boto3 would emit an empty
        NS that the service rejects), so it raises DynamoSerializationError.
        """
        if isinstance(value, float):
            # Through str to avoid binary float artifacts in the Decimal
            return Decimal(str(value))
        if isinstance(value, datetime):
            offset = value.utcoffset()
            if offset is not None and offset.total_seconds() == 0:
                return value.replace(tzinfo=None).isoformat() + "Z"
            return value.isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (set, frozenset)):
            if not value:
                raise DynamoSerializationError("Empty sets cannot be stored in DynamoDB")
            return {self._prepare(v) for v in value}
        if isinstance(value, (list, tuple)):
            return [self._prepare(v) for v in value]
        if isinstance(value, dict):
            return {k: self._prepare(v) for k, v in value.items()}
        return value

    def _restore(self, value: Any) -> Any:
        """Recursively narrows Decimal to int (whole numbers) or float."""
        if isinstance(value, Decimal):
            if value % 1 == 0:
                return int(value)
            return float(value)
        if isinstance(value, list):
            return [self._restore(v) for v in value]
        if isinstance(value, dict):
            return {k: self._restore(v) for k, v in value.items()}
        return value
