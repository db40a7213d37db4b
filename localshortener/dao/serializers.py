"""JSON (de)serialization of stored models

Registry records are stored as one JSON array using camelCase keys, so a store written
by one backend can be read by another:

    [
        {
            "id": "0b6f...",
            "originalUrl": "https://example.com",
            "shortCode": "abc123",
            "createdAt": "2025-10-15T12:00:00Z",
            "expiryDate": "2025-10-15T12:30:00Z",
            "isExpired": false,
            "clicks": [
                {"id": "...", "timestamp": "...", "source": "direct", "userLocation": "en-US/UTC"}
            ]
        }
    ]

`isExpired` is written for out-of-band readers only and ignored on load.

Log entries use the collector's wire shape (see `log_entry_to_dict()`).
"""

import json
from collections.abc import Iterable
from datetime import datetime, UTC
from typing import Any

from localshortener.models import ShortURLModel, ClickModel, LogEntry, LogLevel
from localshortener.dao.exceptions import DataStoreError


def format_timestamp(moment: datetime, timespec: str = 'auto') -> str:
    """Format an aware datetime as ISO-8601 in UTC with a 'Z' suffix

    Example:
        >>> format_timestamp(datetime(2025, 10, 15, 12, 0, tzinfo=UTC), timespec='milliseconds')
        '2025-10-15T12:00:00.000Z'
    """
    return moment.astimezone(UTC).isoformat(timespec=timespec).replace('+00:00', 'Z')


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string, treating naive values as UTC"""
    if not isinstance(value, str):
        raise TypeError(f'Timestamp must be of type string (given type: {type(value)}).')
    moment = datetime.fromisoformat(value)
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


def click_to_dict(click: ClickModel) -> dict[str, Any]:
    return {
        'id': click.id,
        'timestamp': format_timestamp(click.timestamp),
        'source': click.source,
        'userLocation': click.user_location,
    }


def click_from_dict(data: dict[str, Any]) -> ClickModel:
    return ClickModel(
        id=_require_str(data, 'id'),
        timestamp=parse_timestamp(data['timestamp']),
        source=_require_str(data, 'source'),
        user_location=_require_str(data, 'userLocation'),
    )


def short_url_to_dict(short_url: ShortURLModel) -> dict[str, Any]:
    return {
        'id': short_url.id,
        'originalUrl': short_url.original_url,
        'shortCode': short_url.shortcode,
        'createdAt': format_timestamp(short_url.created_at),
        'expiryDate': format_timestamp(short_url.expiry_date),
        'isExpired': short_url.is_expired,
        'clicks': [click_to_dict(click) for click in short_url.clicks],
    }


def short_url_from_dict(data: dict[str, Any]) -> ShortURLModel:
    clicks = data['clicks']
    if not isinstance(clicks, list):
        raise TypeError(f'Clicks must be a list (given type: {type(clicks)}).')

    return ShortURLModel(
        id=_require_str(data, 'id'),
        original_url=_require_str(data, 'originalUrl'),
        shortcode=_require_str(data, 'shortCode'),
        created_at=parse_timestamp(data['createdAt']),
        expiry_date=parse_timestamp(data['expiryDate']),
        clicks=[click_from_dict(click) for click in clicks],
    )


def dumps_short_urls(short_urls: Iterable[ShortURLModel]) -> str:
    return json.dumps([short_url_to_dict(short_url) for short_url in short_urls])


def loads_short_urls(raw: str | bytes) -> list[ShortURLModel]:
    """Deserialize a stored registry document

    Raises:
        DataStoreError:
            If the document is not valid JSON, not an array, or any record is
            missing keys or holds values of the wrong type.
    """
    try:
        document = json.loads(raw)
        if not isinstance(document, list):
            raise TypeError(f'Stored registry must be a JSON array (given type: {type(document).__name__}).')
        return [short_url_from_dict(item) for item in document]
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise DataStoreError(f'Stored registry is malformed: {e}') from e


def log_entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a LogEntry into the collector's JSON wire shape

    `context` is omitted when absent. Values which are not JSON-serializable
    are stringified so the payload can always be encoded.

    Example:
        >>> log_entry_to_dict(entry)
        {'timestamp': '2025-10-15T12:00:00.000Z', 'stack': 'URLRegistry.create', 'level': 'info',
         'package': 'frontend', 'message': 'URL shortened successfully', 'context': {'shortCode': 'abc123'}}
    """
    data = {
        'timestamp': format_timestamp(entry.timestamp, timespec='milliseconds'),
        'stack': entry.stack,
        'level': str(entry.level),
        'package': entry.package,
        'message': entry.message,
    }
    if entry.context is not None:
        try:
            data['context'] = json.loads(json.dumps(entry.context, default=str))
        except (TypeError, ValueError):  # e.g. circular references
            data['context'] = repr(entry.context)
    return data


def log_entry_from_dict(data: dict[str, Any]) -> LogEntry:
    return LogEntry(
        timestamp=parse_timestamp(data['timestamp']),
        stack=_require_str(data, 'stack'),
        level=LogLevel(data['level']),
        package=_require_str(data, 'package'),
        message=_require_str(data, 'message'),
        context=data.get('context'),
    )


def dumps_log_entries(entries: Iterable[LogEntry]) -> str:
    return json.dumps([log_entry_to_dict(entry) for entry in entries])


def loads_log_entries(raw: str | bytes) -> list[LogEntry]:
    """Deserialize a stored log mirror document

    Raises:
        DataStoreError: If the document is malformed.
    """
    try:
        document = json.loads(raw)
        if not isinstance(document, list):
            raise TypeError(f'Stored log mirror must be a JSON array (given type: {type(document).__name__}).')
        return [log_entry_from_dict(item) for item in document]
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise DataStoreError(f'Stored log mirror is malformed: {e}') from e


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be of type string (given type: {type(value)}).")
    return value
