"""
Unit tests for library logging and cursor redaction.
"""

import logging

import pytest

from dynspec import ResultRecordSet, ScanFilterSpec
from dynspec._logging import logger, redact_key


@pytest.mark.unit
class TestLibraryLogger:
    """Test the dynspec logger and what gets logged."""

    def test_library_logger_has_null_handler(self) -> None:
        assert logger.name == "dynspec"
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_split_and_parse_are_logged(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="dynspec")

        ScanFilterSpec().split_segments(3)
        ResultRecordSet.from_response({"Records": [{"Key": "a"}]})

        assert "Split scan into segments" in caplog.text
        assert "Parsed update records response" in caplog.text
        counts = [getattr(r, "record_count", None) for r in caplog.records]
        assert 1 in counts

    def test_carrier_mutators_do_not_log(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="dynspec")
        ScanFilterSpec().with_limit(5).with_segment(0).with_total_segments(1)
        ResultRecordSet().with_records("a")
        assert caplog.records == []


@pytest.mark.unit
class TestRedactKey:
    """Test cursor redaction."""

    def test_redact_key_hashes_values(self) -> None:
        redacted = redact_key({"pk": {"S": "user@example.com"}})
        assert "user@example.com" not in redacted
        assert "pk" in redacted
        # Stable across calls so log lines correlate
        assert redacted == redact_key({"pk": {"S": "user@example.com"}})

    def test_redact_single_value_and_none(self) -> None:
        assert len(redact_key("secret")) == 8
        assert redact_key(None) == "<none>"
