"""Helper utilities shared by the registry, the log buffer and the handlers.

Functions:
    utc_now() -> datetime
        Current moment as an aware UTC datetime (the default clock)
    get_short_url(shortcode, base_url) -> str
        Get string representation of short URL for a given shortcode
    coarse_location() -> str
        Approximate '<language>/<timezone>' of the running process
    caller_context(skip, limit) -> str
        Short description of the calling frames, used as a log entry's stack

Example:
    >>> from localshortener.utils.helpers import get_short_url
    >>> get_short_url('abc123', 'http://localhost:3000/')
    'http://localhost:3000/abc123'
"""

import os
import locale
import traceback
from datetime import datetime, UTC
from pathlib import Path


UNKNOWN = 'unknown'


def utc_now() -> datetime:
    return datetime.now(UTC)


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public base URL of the redirect entry point

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def coarse_location() -> str:
    """Return the process' language and timezone as '<language>/<timezone>'

    This is the server-side stand-in for a browser's `navigator.language` and
    resolved timezone: coarse on purpose, never a precise geolocation.
    Unknown parts are reported as 'unknown'.

    Example:
        >>> coarse_location()
        'en-US/Europe/Sofia'
    """
    language = locale.getlocale()[0] or os.environ.get('LANG', '').split('.')[0]
    if not language or language in {'C', 'POSIX'}:
        language = UNKNOWN

    timezone = os.environ.get('TZ') or datetime.now().astimezone().tzname() or UNKNOWN
    return f'{language.replace("_", "-")}/{timezone}'


def caller_context(skip: int = 1, limit: int = 3) -> str:
    """Describe the frames that called into the current function

    Args:
        skip (int):
            Number of innermost frames to drop besides `caller_context` itself.
            The default drops the function calling `caller_context`.
        limit (int):
            Maximum number of frames to describe.

    Returns:
        str: Newline-separated '<module>.<function>:<line>' items, innermost first.

    Example:
        >>> def log_something():
        ...     return caller_context()
        >>> def handler():
        ...     return log_something()
        >>> handler().splitlines()[0]
        'app.handler:4'
    """
    frames = traceback.extract_stack()[: -(skip + 1)]
    if not frames:
        return 'Stack trace unavailable'
    return '\n'.join(f'{Path(frame.filename).stem}.{frame.name}:{frame.lineno}' for frame in reversed(frames[-limit:]))

