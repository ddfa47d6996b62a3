from .conditions import (
    Attr,
    ComparisonOperator,
    Condition,
    ConditionalOperator,
    FilterTerm,
    condition_begins_with,
    condition_between,
    condition_contains,
    condition_equals,
    condition_greater_or_equal,
    condition_greater_than,
    condition_in,
    condition_less_or_equal,
    condition_less_than,
    condition_not_contains,
    condition_not_equals,
    condition_not_null,
    condition_null,
)
from .exceptions import (
    DynamoSerializationError,
    DynspecError,
    RecordDeserializationError,
    ScanValidationError,
)
from .records import Record, ResultRecordSet
from .scan import MAX_TOTAL_SEGMENTS, ScanFilterSpec
from .serializer import AttributeValueSerializer

__all__ = [
    "ScanFilterSpec",
    "MAX_TOTAL_SEGMENTS",
    "ResultRecordSet",
    "Record",
    "AttributeValueSerializer",
    # Conditions
    "Attr",  # Builder for filter terms
    "Condition",
    "FilterTerm",
    "ComparisonOperator",
    "ConditionalOperator",
    "condition_equals",
    "condition_not_equals",
    "condition_less_than",
    "condition_less_or_equal",
    "condition_greater_than",
    "condition_greater_or_equal",
    "condition_between",
    "condition_in",
    "condition_begins_with",
    "condition_contains",
    "condition_not_contains",
    "condition_null",
    "condition_not_null",
    # Exceptions
    "DynspecError",
    "ScanValidationError",
    "DynamoSerializationError",
    "RecordDeserializationError",
]
