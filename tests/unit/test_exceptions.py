"""
Unit tests for the dynspec exception hierarchy.
"""

import pytest

from dynspec.exceptions import (
    DynamoSerializationError,
    DynspecError,
    RecordDeserializationError,
    ScanValidationError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test the exception classes and their attributes."""

    def test_base_class(self):
        error = DynspecError("Test message")
        assert isinstance(error, Exception)
        assert error.message == "Test message"
        assert error.original_error is None
        assert str(error) == "Test message"

    def test_original_error_preserved(self):
        original = ValueError("Original error")
        error = DynspecError("Wrapped message", original_error=original)
        assert error.original_error is original

    def test_scan_validation_error(self):
        error = ScanValidationError("bad segment", field="segment", value=7)
        assert isinstance(error, DynspecError)
        assert error.field == "segment"
        assert error.value == 7

    def test_scan_validation_error_defaults(self):
        error = ScanValidationError("bad")
        assert error.field is None
        assert error.value is None

    def test_serialization_error(self):
        error = DynamoSerializationError("cannot serialize")
        assert isinstance(error, DynspecError)

    def test_record_deserialization_error(self):
        error = RecordDeserializationError("bad record", index=2)
        assert isinstance(error, DynspecError)
        assert error.index == 2

    def test_catch_all_with_base(self):
        with pytest.raises(DynspecError):
            raise ScanValidationError("bad")
