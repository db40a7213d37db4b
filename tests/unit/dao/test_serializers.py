"""Unit tests for JSON (de)serialization in serializers.py

Test coverage includes:

1. Timestamps
   - Ensures UTC 'Z' formatting and naive-as-UTC parsing.

2. Registry documents
   - Verifies the camelCase record shape.
   - Ensures a dumped document loads back into equal models.
   - Confirms malformed documents raise DataStoreError.

3. Log entries
   - Verifies the collector wire shape (millisecond timestamps, optional context).
   - Ensures non-serializable context never breaks encoding.
"""

import json
from datetime import datetime, UTC

import pytest

from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.serializers import (
    format_timestamp,
    parse_timestamp,
    short_url_to_dict,
    dumps_short_urls,
    loads_short_urls,
    log_entry_to_dict,
    dumps_log_entries,
    loads_log_entries,
)
from localshortener.models import LogEntry, LogLevel


# -------------------------------
# 1. Timestamps
# -------------------------------


def test_format_timestamp_uses_z_suffix():
    """Ensure aware datetimes are rendered in UTC with a 'Z' suffix."""
    moment = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
    assert format_timestamp(moment) == '2025-10-15T12:00:00Z'
    assert format_timestamp(moment, timespec='milliseconds') == '2025-10-15T12:00:00.000Z'


@pytest.mark.parametrize(
    'value',
    [
        '2025-10-15T12:00:00Z',
        '2025-10-15T12:00:00+00:00',
        '2025-10-15T12:00:00',
        '2025-10-15T15:00:00+03:00',
    ],
)
def test_parse_timestamp_returns_aware_utc_moment(value):
    """Ensure every accepted format parses to the same aware moment."""
    assert parse_timestamp(value) == datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


def test_parse_timestamp_rejects_non_strings():
    with pytest.raises(TypeError):
        parse_timestamp(1760529600)


# -------------------------------
# 2. Registry documents
# -------------------------------


def test_short_url_to_dict_uses_camel_case_keys(short_url):
    """Verify the persisted record shape."""
    data = short_url_to_dict(short_url)

    assert data == {
        'id': short_url.id,
        'originalUrl': 'https://example.com/article/123',
        'shortCode': 'abc123',
        'createdAt': '2025-10-15T12:00:00Z',
        'expiryDate': '2025-10-15T12:30:00Z',
        'isExpired': False,
        'clicks': [
            {
                'id': 'c1',
                'timestamp': '2025-10-15T12:01:00Z',
                'source': 'https://news.example.org',
                'userLocation': 'en-US/Europe/Sofia',
            }
        ],
    }


def test_loads_short_urls_restores_models(short_url):
    """Ensure a stored document loads back into equal models."""
    assert loads_short_urls(dumps_short_urls([short_url])) == [short_url]


def test_loads_short_urls_ignores_stored_expired_flag(short_url):
    """Ensure isExpired is not trusted on load."""
    document = json.loads(dumps_short_urls([short_url]))
    document[0]['isExpired'] = True

    (loaded,) = loads_short_urls(json.dumps(document))
    assert loaded.is_expired is False


@pytest.mark.parametrize(
    'raw',
    [
        'not json',
        '{"shortCode": "abc123"}',
        '[{"shortCode": "abc123"}]',
        '[{"id": "1", "originalUrl": "https://a.example", "shortCode": 5, "createdAt": "2025-10-15T12:00:00Z",'
        ' "expiryDate": "2025-10-15T12:30:00Z", "clicks": []}]',
        '[{"id": "1", "originalUrl": "https://a.example", "shortCode": "abc", "createdAt": "yesterday",'
        ' "expiryDate": "2025-10-15T12:30:00Z", "clicks": []}]',
        '[{"id": "1", "originalUrl": "https://a.example", "shortCode": "abc", "createdAt": "2025-10-15T12:00:00Z",'
        ' "expiryDate": "2025-10-15T12:30:00Z", "clicks": {}}]',
        '["abc123"]',
    ],
)
def test_loads_short_urls_with_malformed_document(raw):
    """Confirm malformed documents raise DataStoreError."""
    with pytest.raises(DataStoreError, match='Stored registry is malformed'):
        loads_short_urls(raw)


# -------------------------------
# 3. Log entries
# -------------------------------


@pytest.fixture
def entry():
    return LogEntry(
        timestamp=datetime(2025, 10, 15, 12, 0, 0, 123456, tzinfo=UTC),
        stack='URLRegistry.create',
        level=LogLevel.INFO,
        package='frontend',
        message='URL shortened successfully',
        context={'shortCode': 'abc123'},
    )


def test_log_entry_to_dict_wire_shape(entry):
    """Verify the collector payload shape."""
    assert log_entry_to_dict(entry) == {
        'timestamp': '2025-10-15T12:00:00.123Z',
        'stack': 'URLRegistry.create',
        'level': 'info',
        'package': 'frontend',
        'message': 'URL shortened successfully',
        'context': {'shortCode': 'abc123'},
    }


def test_log_entry_to_dict_omits_missing_context(entry):
    data = log_entry_to_dict(LogEntry(entry.timestamp, entry.stack, entry.level, entry.package, entry.message))
    assert 'context' not in data


def test_log_entry_to_dict_stringifies_unserializable_context(entry):
    """Ensure arbitrary objects in context never break the payload."""
    moment = datetime(2025, 10, 15, tzinfo=UTC)
    data = log_entry_to_dict(LogEntry(entry.timestamp, entry.stack, entry.level, entry.package, entry.message, {'at': moment}))
    assert data['context'] == {'at': str(moment)}


def test_log_entry_to_dict_with_circular_context(entry):
    """Ensure circular context falls back to its repr."""
    context = {}
    context['self'] = context
    data = log_entry_to_dict(LogEntry(entry.timestamp, entry.stack, entry.level, entry.package, entry.message, context))
    assert isinstance(data['context'], str)
    json.dumps(data)


def test_loads_log_entries_restores_entries(entry):
    (loaded,) = loads_log_entries(dumps_log_entries([entry]))

    assert loaded.level is LogLevel.INFO
    assert loaded.context == {'shortCode': 'abc123'}
    assert loaded.timestamp == datetime(2025, 10, 15, 12, 0, 0, 123000, tzinfo=UTC)


def test_loads_log_entries_with_unknown_level():
    raw = '[{"timestamp": "2025-10-15T12:00:00.000Z", "stack": "s", "level": "verbose", "package": "p", "message": "m"}]'
    with pytest.raises(DataStoreError, match='Stored log mirror is malformed'):
        loads_log_entries(raw)
