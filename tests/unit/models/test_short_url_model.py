"""Unit tests for the ShortURLModel and ClickModel dataclasses in short_url_model.py.

Test coverage includes:

1. Model creation
   - Ensures instances can be created with valid field types and values.
   - Verifies clicks default to an empty list and is_expired to False.

2. Expiry semantics
   - expired_at() is strictly "moment > expiry_date".
   - refresh_expiry() updates the flag and reports whether it changed.

3. Mutability
   - ClickModel is frozen; ShortURLModel only changes through clicks and the flag.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, UTC

import pytest

from localshortener.models import ShortURLModel, ClickModel


@pytest.fixture
def created_at():
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def model(created_at):
    return ShortURLModel(
        id='5f0c',
        original_url='https://example.com/article/123',
        shortcode='abc123',
        created_at=created_at,
        expiry_date=created_at + timedelta(minutes=30),
    )


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------


def test_valid_short_url_model_creation(model, created_at):
    """Ensure ShortURLModel can be created with valid data and defaults."""
    assert model.original_url == 'https://example.com/article/123'
    assert model.shortcode == 'abc123'
    assert model.created_at == created_at
    assert model.expiry_date - model.created_at == timedelta(minutes=30)
    assert model.clicks == []
    assert model.is_expired is False


def test_clicks_default_is_not_shared(created_at):
    """Verify every model gets its own clicks list."""
    first = ShortURLModel(id='1', original_url='https://a.example', shortcode='aaa', created_at=created_at, expiry_date=created_at)
    second = ShortURLModel(id='2', original_url='https://b.example', shortcode='bbb', created_at=created_at, expiry_date=created_at)

    first.clicks.append(ClickModel(id='c', timestamp=created_at, source='direct', user_location='unknown/unknown'))

    assert second.clicks == []


# -------------------------------------------------
# 2. Expiry semantics
# -------------------------------------------------


@pytest.mark.parametrize(
    'offset, expected',
    [
        (timedelta(minutes=29, seconds=59), False),
        (timedelta(minutes=30), False),
        (timedelta(minutes=30, microseconds=1), True),
        (timedelta(days=1), True),
    ],
)
def test_expired_at_is_strictly_after_expiry(model, created_at, offset, expected):
    """Ensure a link is still live at exactly its expiry date."""
    assert model.expired_at(created_at + offset) is expected


def test_refresh_expiry_reports_changes(model, created_at):
    """Ensure refresh_expiry() only reports a change when the flag flips."""
    assert model.refresh_expiry(created_at + timedelta(minutes=10)) is False
    assert model.is_expired is False

    assert model.refresh_expiry(created_at + timedelta(minutes=31)) is True
    assert model.is_expired is True

    assert model.refresh_expiry(created_at + timedelta(minutes=32)) is False
    assert model.is_expired is True


def test_refresh_expiry_can_clear_stale_flag(model, created_at):
    """Ensure a stale flag is recomputed from expiry_date, the source of truth."""
    model.is_expired = True

    assert model.refresh_expiry(created_at) is True
    assert model.is_expired is False


# -------------------------------------------------
# 3. Mutability
# -------------------------------------------------


def test_click_model_is_frozen(created_at):
    """Verify ClickModel fields can't be reassigned."""
    click = ClickModel(id='c1', timestamp=created_at, source='direct', user_location='en-US/UTC')
    with pytest.raises(FrozenInstanceError):
        click.source = 'https://elsewhere.example'
