from typing import Any


class DynspecError(Exception):
    """Base exception for all dynspec errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ScanValidationError(DynspecError):
    """Raised by ScanFilterSpec.validate() when the scan request is inconsistent."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field
        self.value = value


class DynamoSerializationError(DynspecError):
    """Raised when a value cannot be converted to DynamoDB AttributeValue format."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message, original_error)


class RecordDeserializationError(DynspecError):
    """Raised when an UpdateRecords response entry is not a valid Record."""

    def __init__(
        self, message: str, index: int | None = None, original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)
        self.index = index
