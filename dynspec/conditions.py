"""
Scan filter conditions for dynspec.

A Condition is the legacy DynamoDB comparison predicate: one
ComparisonOperator plus its operand values. Conditions are keyed by
attribute name inside ScanFilterSpec.scan_filter and combined across
attributes by a ConditionalOperator (AND / OR).

Design:
- Condition stores plain Python operands; they are serialized to
  AttributeValue format only when a request is rendered
- Condition.to_boto3 maps onto boto3.dynamodb.conditions so the same
  filter can be compiled into a FilterExpression by boto3's builder
- Attr mirrors boto3's Attr DSL but yields (name, Condition) pairs

Usage:
    from dynspec import Attr, ScanFilterSpec, condition_equals

    spec = ScanFilterSpec().with_filter_condition_entry("status", condition_equals("ACTIVE"))
    spec = ScanFilterSpec().with_filter(Attr("age") >= 18, Attr("name").begins_with("A"))
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import TYPE_CHECKING, Any, NamedTuple

from boto3.dynamodb.conditions import Attr as Boto3Attr
from boto3.dynamodb.conditions import ConditionBase as Boto3ConditionBase
from boto3.dynamodb.conditions import ConditionExpressionBuilder

from .exceptions import ScanValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .serializer import AttributeValueSerializer

# Marks operators that take one or more operands (IN)
VARIADIC = -1


class ComparisonOperator(str, Enum):
    """Comparison operators accepted in a legacy ScanFilter condition."""

    EQ = "EQ"
    NE = "NE"
    IN = "IN"
    LE = "LE"
    LT = "LT"
    GE = "GE"
    GT = "GT"
    BETWEEN = "BETWEEN"
    NOT_NULL = "NOT_NULL"
    NULL = "NULL"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    BEGINS_WITH = "BEGINS_WITH"

    @property
    def operand_count(self) -> int:
        """Number of AttributeValueList entries the operator expects (VARIADIC for IN)."""
        if self in (ComparisonOperator.NULL, ComparisonOperator.NOT_NULL):
            return 0
        if self is ComparisonOperator.BETWEEN:
            return 2
        if self is ComparisonOperator.IN:
            return VARIADIC
        return 1


class ConditionalOperator(str, Enum):
    """Logical operator applied across the conditions of a scan filter."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Condition:
    """
    A single comparison predicate: operator + operand values.

    Attributes:
        comparison_operator: How the attribute is compared
        attribute_values: Operands, as plain Python values
    """

    comparison_operator: ComparisonOperator
    attribute_values: tuple[Any, ...] = ()

    def check_operands(self, attribute_name: str | None = None) -> None:
        """
        Verifies the operand count matches the comparison operator.

        Raises:
            ScanValidationError: If the count does not match
        """
        expected = self.comparison_operator.operand_count
        actual = len(self.attribute_values)
        if expected == VARIADIC:
            valid = actual >= 1
            wanted = "at least 1"
        else:
            valid = actual == expected
            wanted = str(expected)
        if not valid:
            raise ScanValidationError(
                f"{self.comparison_operator.value} expects {wanted} operand(s), got {actual}",
                field=attribute_name,
                value=self.attribute_values,
            )

    def to_dynamo(self, serializer: AttributeValueSerializer) -> dict[str, Any]:
        """
        Renders the legacy request shape:
        {"ComparisonOperator": "EQ", "AttributeValueList": [{"S": "ACTIVE"}]}
        """
        result: dict[str, Any] = {"ComparisonOperator": self.comparison_operator.value}
        if self.attribute_values:
            result["AttributeValueList"] = [
                serializer.to_dynamo_value(v) for v in self.attribute_values
            ]
        return result

    def to_boto3(self, attribute_name: str) -> Boto3ConditionBase:
        """Maps this condition onto the equivalent boto3 condition on `attribute_name`."""
        self.check_operands(attribute_name)
        attr = Boto3Attr(attribute_name)
        op = self.comparison_operator
        values = self.attribute_values

        if op is ComparisonOperator.NULL:
            return attr.not_exists()
        if op is ComparisonOperator.NOT_NULL:
            return attr.exists()
        if op is ComparisonOperator.BETWEEN:
            return attr.between(values[0], values[1])
        if op is ComparisonOperator.IN:
            return attr.is_in(list(values))
        if op is ComparisonOperator.NOT_CONTAINS:
            return ~attr.contains(values[0])

        builders = {
            ComparisonOperator.EQ: attr.eq,
            ComparisonOperator.NE: attr.ne,
            ComparisonOperator.LT: attr.lt,
            ComparisonOperator.LE: attr.lte,
            ComparisonOperator.GT: attr.gt,
            ComparisonOperator.GE: attr.gte,
            ComparisonOperator.CONTAINS: attr.contains,
            ComparisonOperator.BEGINS_WITH: attr.begins_with,
        }
        return builders[op](values[0])


class FilterTerm(NamedTuple):
    """An attribute name paired with the condition that filters it."""

    attribute_name: str
    condition: Condition


# Shorthand constructors


def condition_equals(value: Any) -> Condition:
    return Condition(ComparisonOperator.EQ, (value,))


def condition_not_equals(value: Any) -> Condition:
    return Condition(ComparisonOperator.NE, (value,))


def condition_less_than(value: Any) -> Condition:
    return Condition(ComparisonOperator.LT, (value,))


def condition_less_or_equal(value: Any) -> Condition:
    return Condition(ComparisonOperator.LE, (value,))


def condition_greater_than(value: Any) -> Condition:
    return Condition(ComparisonOperator.GT, (value,))


def condition_greater_or_equal(value: Any) -> Condition:
    return Condition(ComparisonOperator.GE, (value,))


def condition_between(low: Any, high: Any) -> Condition:
    return Condition(ComparisonOperator.BETWEEN, (low, high))


def condition_in(*values: Any) -> Condition:
    return Condition(ComparisonOperator.IN, tuple(values))


def condition_begins_with(prefix: str) -> Condition:
    return Condition(ComparisonOperator.BEGINS_WITH, (prefix,))


def condition_contains(value: Any) -> Condition:
    return Condition(ComparisonOperator.CONTAINS, (value,))


def condition_not_contains(value: Any) -> Condition:
    return Condition(ComparisonOperator.NOT_CONTAINS, (value,))


def condition_null() -> Condition:
    """Attribute does not exist."""
    return Condition(ComparisonOperator.NULL)


def condition_not_null() -> Condition:
    """Attribute exists."""
    return Condition(ComparisonOperator.NOT_NULL)


class Attr:
    """
    Represents a table attribute for building scan filter terms.

    Every method returns a FilterTerm which ScanFilterSpec.with_filter()
    accepts directly.

    Usage:
        Attr("age") >= 18
        Attr("status") == "active"
        Attr("email").not_exists()
        Attr("age").between(18, 65)
        Attr("status").is_in(["active", "pending"])
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def _term(self, condition: Condition) -> FilterTerm:
        return FilterTerm(self.name, condition)

    def __eq__(self, value: Any) -> FilterTerm:  # type: ignore[override]
        return self._term(condition_equals(value))

    def __ne__(self, value: Any) -> FilterTerm:  # type: ignore[override]
        return self._term(condition_not_equals(value))

    def __lt__(self, value: Any) -> FilterTerm:
        return self._term(condition_less_than(value))

    def __le__(self, value: Any) -> FilterTerm:
        return self._term(condition_less_or_equal(value))

    def __gt__(self, value: Any) -> FilterTerm:
        return self._term(condition_greater_than(value))

    def __ge__(self, value: Any) -> FilterTerm:
        return self._term(condition_greater_or_equal(value))

    def exists(self) -> FilterTerm:
        return self._term(condition_not_null())

    def not_exists(self) -> FilterTerm:
        return self._term(condition_null())

    def begins_with(self, prefix: str) -> FilterTerm:
        return self._term(condition_begins_with(prefix))

    def contains(self, value: Any) -> FilterTerm:
        """Substring match for strings, membership for lists and sets."""
        return self._term(condition_contains(value))

    def not_contains(self, value: Any) -> FilterTerm:
        return self._term(condition_not_contains(value))

    def between(self, low: Any, high: Any) -> FilterTerm:
        """Inclusive on both ends."""
        return self._term(condition_between(low, high))

    def is_in(self, values: list[Any]) -> FilterTerm:
        return self._term(condition_in(*values))

    def __repr__(self) -> str:
        return f"Attr({self.name!r})"


def compile_scan_filter(
    scan_filter: Mapping[str, Condition],
    conditional_operator: str | None,
    serializer: AttributeValueSerializer,
) -> dict[str, Any]:
    """
    Compiles a legacy scan filter into FilterExpression request parameters.

    Each condition is mapped onto its boto3 equivalent, the results are
    joined with AND or OR (AND when no operator is given) and boto3's
    ConditionExpressionBuilder generates the expression string and
    placeholders.

    Args:
        scan_filter: Attribute name -> Condition, non-empty
        conditional_operator: "AND", "OR" or None
        serializer: Converts placeholder values to AttributeValue format

    Returns:
        Dict with FilterExpression, and ExpressionAttributeNames /
        ExpressionAttributeValues when non-empty

    Raises:
        ScanValidationError: Empty filter, unknown operator or bad operand count
    """
    if not scan_filter:
        raise ScanValidationError("Cannot compile an empty scan filter", field="scan_filter")

    try:
        logical = ConditionalOperator(conditional_operator or ConditionalOperator.AND.value)
    except ValueError as e:
        raise ScanValidationError(
            f"Unknown conditional operator {conditional_operator!r}",
            field="conditional_operator",
            value=conditional_operator,
            original_error=e,
        ) from e

    combine = operator.and_ if logical is ConditionalOperator.AND else operator.or_
    combined = reduce(
        combine, (condition.to_boto3(name) for name, condition in scan_filter.items())
    )

    expression = ConditionExpressionBuilder().build_expression(combined, is_key_condition=False)

    result: dict[str, Any] = {"FilterExpression": expression.condition_expression}
    if expression.attribute_name_placeholders:
        result["ExpressionAttributeNames"] = dict(expression.attribute_name_placeholders)
    if expression.attribute_value_placeholders:
        result["ExpressionAttributeValues"] = {
            placeholder: serializer.to_dynamo_value(value)
            for placeholder, value in expression.attribute_value_placeholders.items()
        }
    return result
