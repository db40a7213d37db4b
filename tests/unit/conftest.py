"""Fixtures shared by the unit test suite"""

import random
import logging
from concurrent.futures import Future
from datetime import datetime, timedelta, UTC

import pytest

from localshortener.dao import ShortURLMemoryDAO, LogMirrorMemoryDAO
from localshortener.models import ShortURLModel, ClickModel
from localshortener.registry import URLRegistry


class FakeClock:
    """Injectable clock that only moves when told to"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class FakeTransport:
    """LogTransport recording payloads and answering with a fixed status (or raising)"""

    def __init__(self, status_code: int = 201, error: Exception | None = None):
        self.status_code = status_code
        self.error = error
        self.sent = []
        self.closed = False

    def send(self, endpoint, payload):
        self.sent.append((endpoint, payload))
        if self.error is not None:
            raise self.error
        return self.status_code

    def close(self):
        self.closed = True


class ImmediateExecutor:
    """Executor running submitted work synchronously, so delivery outcomes are deterministic"""

    def __init__(self):
        self.shutdown_called = False

    def submit(self, fn, *args, **kwargs):
        if self.shutdown_called:
            raise RuntimeError('cannot schedule new futures after shutdown')
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:  # noqa: BLE001
            future.set_exception(e)
        return future

    def shutdown(self, wait=True, **kwargs):
        self.shutdown_called = True


@pytest.fixture
def now():
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def clock(now):
    return FakeClock(now)


@pytest.fixture
def slots():
    """Key-value slots shared by memory DAOs, standing in for browser storage"""
    return {}


@pytest.fixture
def short_url_dao(slots):
    return ShortURLMemoryDAO(storage=slots)


@pytest.fixture
def log_mirror_dao(slots):
    return LogMirrorMemoryDAO(storage=slots)


@pytest.fixture
def registry(short_url_dao, clock):
    return URLRegistry(short_url_dao, clock=clock, location_provider=lambda: 'en-US/UTC', rng=random.Random(42))


@pytest.fixture
def short_url(now):
    return ShortURLModel(
        id='0b6f6a52-4c2e-4c5f-9d4e-1f2a3b4c5d6e',
        original_url='https://example.com/article/123',
        shortcode='abc123',
        created_at=now,
        expiry_date=now + timedelta(minutes=30),
        clicks=[
            ClickModel(
                id='c1',
                timestamp=now + timedelta(minutes=1),
                source='https://news.example.org',
                user_location='en-US/Europe/Sofia',
            )
        ],
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Keep handlers attached by Application.from_config() from leaking between tests"""
    package_logger = logging.getLogger('localshortener')
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
