"""
Result container for batch record updates.

ResultRecordSet holds the ordered Records returned by an UpdateRecords
call. The record list is lazily materialized: reading it never yields
None, but a list created only by a read is still reported as unset
(records_set is False) so it can be omitted when the result is rendered
back into a response dict.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ._logging import logger
from .exceptions import RecordDeserializationError

R = TypeVar("R")


class Record(BaseModel):
    """
    A single synchronized key/value record.

    Populated from the PascalCase wire names (Key, Value, SyncCount, ...)
    but accessed through snake_case attributes. Frozen so records can be
    hashed and compared by value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    key: str = Field(alias="Key")
    value: str | None = Field(default=None, alias="Value")
    sync_count: int | None = Field(default=None, alias="SyncCount")
    last_modified_date: datetime | None = Field(default=None, alias="LastModifiedDate")
    last_modified_by: str | None = Field(default=None, alias="LastModifiedBy")
    device_last_modified_date: datetime | None = Field(
        default=None, alias="DeviceLastModifiedDate"
    )


class ResultRecordSet(Generic[R]):
    """
    Ordered sequence of records returned by a batch update call.

    Elements are opaque: any object may be stored. Equality and hashing are
    structural over the record sequence alone, and an unset record list
    compares equal to an empty one.

    Usage:
        result = ResultRecordSet().with_records(r1, r2)
        result.records            # [r1, r2]
        result.records = None     # back to unset
    """

    def __init__(self, records: Iterable[R] | None = None) -> None:
        self._records: list[R] | None = None
        # True while the current list exists only because a read created it
        self._auto_constructed = False
        if records is not None:
            self.records = records

    @property
    def records(self) -> list[R]:
        """The record list; allocated empty on first read if unset."""
        if self._records is None:
            self._records = []
            self._auto_constructed = True
        return self._records

    @records.setter
    def records(self, records: Iterable[R] | None) -> None:
        if records is None:
            self._records = None
            self._auto_constructed = False
            return
        self._records = list(records)
        self._auto_constructed = False

    @property
    def records_set(self) -> bool:
        """True when records were explicitly assigned or appended."""
        return self._records is not None and not self._auto_constructed

    def with_records(self, *records: R) -> "ResultRecordSet[R]":
        """Appends the given records and returns self for chaining."""
        return self.with_records_from(records)

    def with_records_from(self, records: Iterable[R] | None) -> "ResultRecordSet[R]":
        """
        Appends every record of an existing sequence and returns self for chaining.
        Appending nothing (None or an empty sequence) leaves an unset list unset.
        """
        if records is None:
            return self
        before = len(self.records)
        self.records.extend(records)
        if len(self.records) > before:
            self._auto_constructed = False
        return self

    # --- RESPONSE MAPPING ---

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "ResultRecordSet[Record]":
        """
        Builds a result set from a cognito-sync update_records response.

        A response without a "Records" key leaves the record list unset.

        Raises:
            RecordDeserializationError: If an entry is not a valid Record
        """
        result: ResultRecordSet[Record] = cls()
        raw_records = response.get("Records")
        if raw_records is None:
            logger.debug("Response carries no records")
            return result

        parsed = []
        for index, raw in enumerate(raw_records):
            try:
                parsed.append(Record.model_validate(raw))
            except PydanticValidationError as e:
                raise RecordDeserializationError(
                    f"Invalid record at position {index}: {e.error_count()} error(s)",
                    index=index,
                    original_error=e,
                ) from e
        result.records = parsed

        logger.debug("Parsed update records response", extra={"record_count": len(parsed)})
        return result

    def to_response(self) -> dict[str, Any]:
        """
        Renders the result set back into the response shape, using wire names
        for Record elements. Unset records are omitted.
        """
        if not self.records_set:
            return {}
        return {
            "Records": [
                r.model_dump(by_alias=True, exclude_none=True) if isinstance(r, Record) else r
                for r in self.records
            ]
        }

    # --- VALUE SEMANTICS ---

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ResultRecordSet):
            return NotImplemented
        return (self._records or []) == (other._records or [])

    def __hash__(self) -> int:
        return hash((ResultRecordSet, tuple(_element_hash(r) for r in self._records or ())))

    def __repr__(self) -> str:
        if self._records is None:
            return "ResultRecordSet()"
        return f"ResultRecordSet(records={self._records!r})"

    def __iter__(self) -> Iterator[R]:
        return iter(self.records)


def _element_hash(value: Any) -> int:
    # Unhashable records (dicts, lists) all collapse to one bucket
    try:
        return hash(value)
    except TypeError:
        return 0
