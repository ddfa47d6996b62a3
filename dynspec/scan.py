"""
Scan filter configuration with fluent setters.

ScanFilterSpec describes how a full-table or parallel scan is filtered,
paginated and partitioned. It is a plain mutable carrier: setters and
with_* chainers store whatever they are given. Cross-field consistency
(segment inside [0, total_segments), positive limit, operand counts) is
checked only when validate() is called explicitly, normally right before
the request is handed to the client.

Usage:
    spec = (
        ScanFilterSpec()
        .with_limit(25)
        .with_total_segments(2)
        .with_segment(1)
        .with_filter_condition_entry("status", condition_equals("ACTIVE"))
    )
    client.scan(**spec.validate().to_scan_kwargs("users"))
"""

from typing import Any

from ._logging import logger, redact_key
from .conditions import Condition, ConditionalOperator, FilterTerm, compile_scan_filter
from .exceptions import ScanValidationError
from .serializer import AttributeValueSerializer

# Upper bound DynamoDB accepts for TotalSegments
MAX_TOTAL_SEGMENTS = 1_000_000


class ScanFilterSpec:
    """
    Options for filtering results from a scan operation.

    Attributes:
        scan_filter: Attribute name -> Condition, or None when unset
        exclusive_start_key: AttributeValue-format cursor to resume from
        limit: Maximum number of items to *evaluate* (not to return)
        total_segments: Number of parallel scan partitions
        segment: Zero-based partition scanned by this worker
        conditional_operator: "AND" / "OR" applied across filter conditions
    """

    def __init__(self) -> None:
        self._scan_filter: dict[str, Condition] | None = None
        self._exclusive_start_key: dict[str, dict[str, Any]] | None = None
        self._limit: int | None = None
        self._total_segments: int | None = None
        self._segment: int | None = None
        self._conditional_operator: str | None = None

    # --- SCAN FILTER ---

    @property
    def scan_filter(self) -> dict[str, Condition] | None:
        return self._scan_filter

    @scan_filter.setter
    def scan_filter(self, scan_filter: dict[str, Condition] | None) -> None:
        self._scan_filter = scan_filter

    def with_scan_filter(self, scan_filter: dict[str, Condition] | None) -> "ScanFilterSpec":
        self.scan_filter = scan_filter
        return self

    def add_filter_condition(self, attribute_name: str, condition: Condition) -> None:
        """
        Adds a condition on `attribute_name`, replacing any earlier condition
        on the same attribute.
        """
        if self._scan_filter is None:
            self._scan_filter = {}
        self._scan_filter[attribute_name] = condition

    def with_filter_condition_entry(
        self, attribute_name: str, condition: Condition
    ) -> "ScanFilterSpec":
        self.add_filter_condition(attribute_name, condition)
        return self

    def with_filter(self, *terms: FilterTerm) -> "ScanFilterSpec":
        """
        Adds conditions built with Attr.

        Usage:
            spec.with_filter(Attr("age") >= 18, Attr("status") == "active")
        """
        for attribute_name, condition in terms:
            self.add_filter_condition(attribute_name, condition)
        return self

    # --- CURSOR ---

    @property
    def exclusive_start_key(self) -> dict[str, dict[str, Any]] | None:
        return self._exclusive_start_key

    @exclusive_start_key.setter
    def exclusive_start_key(self, exclusive_start_key: dict[str, dict[str, Any]] | None) -> None:
        self._exclusive_start_key = exclusive_start_key

    def with_exclusive_start_key(
        self, exclusive_start_key: dict[str, dict[str, Any]] | None
    ) -> "ScanFilterSpec":
        self._exclusive_start_key = exclusive_start_key
        return self

    @property
    def start_cursor(self) -> dict[str, Any] | None:
        """The exclusive start key as plain Python values, e.g. {"pk": "user#1"}."""
        if self._exclusive_start_key is None:
            return None
        return AttributeValueSerializer().from_dynamo(self._exclusive_start_key)

    def with_start_cursor(
        self,
        cursor: dict[str, Any] | None,
        serializer: AttributeValueSerializer | None = None,
    ) -> "ScanFilterSpec":
        """
        Sets the exclusive start key from a plain Python cursor, such as the
        LastEvaluatedKey a previous page returned to a frontend.
        """
        if cursor is None:
            self._exclusive_start_key = None
        else:
            self._exclusive_start_key = (serializer or AttributeValueSerializer()).to_dynamo(
                cursor
            )
        return self

    # --- LIMIT ---

    @property
    def limit(self) -> int | None:
        """
        The number of items to scan before the request returns.

        Use with caution: this is not the number of items returned. A page
        stops as soon as this many items were evaluated, even when none of
        them matched the filter, so a low limit on a filtered scan costs
        more round trips for the same read capacity.
        """
        return self._limit

    @limit.setter
    def limit(self, limit: int | None) -> None:
        self._limit = limit

    def with_limit(self, limit: int | None) -> "ScanFilterSpec":
        self._limit = limit
        return self

    # --- PARALLEL SCAN ---

    @property
    def total_segments(self) -> int | None:
        return self._total_segments

    @total_segments.setter
    def total_segments(self, total_segments: int | None) -> None:
        self._total_segments = total_segments

    def with_total_segments(self, total_segments: int | None) -> "ScanFilterSpec":
        self.total_segments = total_segments
        return self

    @property
    def segment(self) -> int | None:
        return self._segment

    @segment.setter
    def segment(self, segment: int | None) -> None:
        self._segment = segment

    def with_segment(self, segment: int | None) -> "ScanFilterSpec":
        self.segment = segment
        return self

    def split_segments(self, total_segments: int) -> list["ScanFilterSpec"]:
        """
        Plans a parallel scan: one independent copy of this spec per segment.

        A resume cursor belongs to the single segment whose page returned it,
        so the copies start without an exclusive start key.

        Args:
            total_segments: Number of partitions (one per worker)

        Returns:
            Specs with segment 0..total_segments-1 and the given total_segments

        Raises:
            ScanValidationError: If total_segments is outside [1, MAX_TOTAL_SEGMENTS]
        """
        _check_total_segments(total_segments)

        specs = [
            self.copy()
            .with_total_segments(total_segments)
            .with_segment(segment)
            .with_exclusive_start_key(None)
            for segment in range(total_segments)
        ]
        logger.debug(
            "Split scan into segments",
            extra={
                "total_segments": total_segments,
                "conditions": len(self._scan_filter or {}),
            },
        )
        return specs

    # --- CONDITIONAL OPERATOR ---

    @property
    def conditional_operator(self) -> str | None:
        return self._conditional_operator

    @conditional_operator.setter
    def conditional_operator(self, conditional_operator: str | ConditionalOperator | None) -> None:
        if isinstance(conditional_operator, ConditionalOperator):
            conditional_operator = conditional_operator.value
        self._conditional_operator = conditional_operator

    def with_conditional_operator(
        self, conditional_operator: str | ConditionalOperator | None
    ) -> "ScanFilterSpec":
        self.conditional_operator = conditional_operator
        return self

    # --- VALIDATION & RENDERING ---

    def validate(self) -> "ScanFilterSpec":
        """
        Checks the spec the way the Scan API would, without sending anything.

        Returns:
            self, so validation can sit inside a chain

        Raises:
            ScanValidationError: On the first inconsistency found
        """
        try:
            self._validate()
        except ScanValidationError as e:
            logger.debug(
                "Scan spec rejected", extra={"field": e.field, "reason": e.message}
            )
            raise
        return self

    def _validate(self) -> None:
        if self._limit is not None and self._limit < 1:
            raise ScanValidationError(
                f"limit must be at least 1, got {self._limit}", field="limit", value=self._limit
            )

        if (self._segment is None) != (self._total_segments is None):
            raise ScanValidationError(
                "segment and total_segments must be set together",
                field="segment" if self._segment is None else "total_segments",
            )
        if self._total_segments is not None and self._segment is not None:
            _check_total_segments(self._total_segments)
            if not 0 <= self._segment < self._total_segments:
                raise ScanValidationError(
                    f"segment must be in [0, {self._total_segments}), got {self._segment}",
                    field="segment",
                    value=self._segment,
                )

        if self._conditional_operator is not None:
            try:
                ConditionalOperator(self._conditional_operator)
            except ValueError as e:
                raise ScanValidationError(
                    f"Unknown conditional operator {self._conditional_operator!r}",
                    field="conditional_operator",
                    value=self._conditional_operator,
                    original_error=e,
                ) from e

        for attribute_name, condition in (self._scan_filter or {}).items():
            condition.check_operands(attribute_name)

    def to_scan_kwargs(
        self, table_name: str, serializer: AttributeValueSerializer | None = None
    ) -> dict[str, Any]:
        """
        Renders keyword arguments for a low-level client.scan() call using the
        legacy ScanFilter / ConditionalOperator parameters. Unset fields are
        omitted.
        """
        serializer = serializer or AttributeValueSerializer()
        kwargs = self._base_kwargs(table_name)

        if self._scan_filter:
            kwargs["ScanFilter"] = {
                name: condition.to_dynamo(serializer)
                for name, condition in self._scan_filter.items()
            }
            if self._conditional_operator is not None:
                kwargs["ConditionalOperator"] = self._conditional_operator

        self._log_rendered(table_name, "legacy")
        return kwargs

    def to_expression_kwargs(
        self, table_name: str, serializer: AttributeValueSerializer | None = None
    ) -> dict[str, Any]:
        """
        Renders keyword arguments for client.scan() with the scan filter
        compiled into a FilterExpression. Conditions are joined with the
        conditional operator (AND when unset).
        """
        serializer = serializer or AttributeValueSerializer()
        kwargs = self._base_kwargs(table_name)

        if self._scan_filter:
            kwargs.update(
                compile_scan_filter(self._scan_filter, self._conditional_operator, serializer)
            )

        self._log_rendered(table_name, "expression")
        return kwargs

    def _base_kwargs(self, table_name: str) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"TableName": table_name}
        if self._exclusive_start_key is not None:
            kwargs["ExclusiveStartKey"] = self._exclusive_start_key
        if self._limit is not None:
            kwargs["Limit"] = self._limit
        if self._total_segments is not None:
            kwargs["TotalSegments"] = self._total_segments
        if self._segment is not None:
            kwargs["Segment"] = self._segment
        return kwargs

    def _log_rendered(self, table_name: str, style: str) -> None:
        logger.debug(
            "Rendered scan request",
            extra={
                "table": table_name,
                "style": style,
                "conditions": len(self._scan_filter or {}),
                "limit": self._limit,
                "segment": self._segment,
                "total_segments": self._total_segments,
                "cursor": redact_key(self._exclusive_start_key),
            },
        )

    # --- VALUE SEMANTICS ---

    def copy(self) -> "ScanFilterSpec":
        """Independent copy; the filter dict and start key are not shared."""
        clone = ScanFilterSpec()
        clone._scan_filter = dict(self._scan_filter) if self._scan_filter is not None else None
        clone._exclusive_start_key = (
            dict(self._exclusive_start_key) if self._exclusive_start_key is not None else None
        )
        clone._limit = self._limit
        clone._total_segments = self._total_segments
        clone._segment = self._segment
        clone._conditional_operator = self._conditional_operator
        return clone

    def _fields(self) -> tuple[Any, ...]:
        return (
            self._scan_filter,
            self._exclusive_start_key,
            self._limit,
            self._total_segments,
            self._segment,
            self._conditional_operator,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScanFilterSpec):
            return NotImplemented
        return self._fields() == other._fields()

    # Mutable carrier
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = (
            "scan_filter",
            "exclusive_start_key",
            "limit",
            "total_segments",
            "segment",
            "conditional_operator",
        )
        parts = [
            f"{name}={value!r}"
            for name, value in zip(names, self._fields(), strict=True)
            if value is not None
        ]
        return f"ScanFilterSpec({', '.join(parts)})"


def _check_total_segments(total_segments: int) -> None:
    if not 1 <= total_segments <= MAX_TOTAL_SEGMENTS:
        raise ScanValidationError(
            f"total_segments must be in [1, {MAX_TOTAL_SEGMENTS}], got {total_segments}",
            field="total_segments",
            value=total_segments,
        )
