"""
Shared pytest fixtures and configuration for dynspec tests.

Provides sample records, conditions and a serializer used across the
unit test modules.
"""

from datetime import datetime, timezone

import pytest

from dynspec import AttributeValueSerializer, Record, condition_equals


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests without external dependencies")


@pytest.fixture
def serializer() -> AttributeValueSerializer:
    return AttributeValueSerializer()


@pytest.fixture
def sample_records() -> list[Record]:
    """Three records as returned by an UpdateRecords call."""
    modified = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return [
        Record(key="theme", value="dark", sync_count=3, last_modified_date=modified),
        Record(key="locale", value="it_IT", sync_count=1, last_modified_date=modified),
        Record(key="volume", value="7", sync_count=12, last_modified_by="device-a"),
    ]


@pytest.fixture
def update_records_response() -> dict:
    """A cognito-sync update_records response in boto3's shape."""
    return {
        "Records": [
            {
                "Key": "theme",
                "Value": "dark",
                "SyncCount": 4,
                "LastModifiedDate": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
                "LastModifiedBy": "device-a",
                "DeviceLastModifiedDate": datetime(2024, 5, 1, 11, 59, tzinfo=timezone.utc),
            },
            {"Key": "locale", "Value": "it_IT", "SyncCount": 2},
        ],
        "ResponseMetadata": {"HTTPStatusCode": 200},
    }


@pytest.fixture
def active_condition():
    return condition_equals("ACTIVE")
