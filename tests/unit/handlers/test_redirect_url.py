"""Unit tests for the redirect_url handler.

Test coverage includes:

1. Successful redirect
   - Ensures active shortcodes return a 302 redirect with the correct Location header.
   - Validates the click is recorded with referrer and header-derived location.

2. Invalid path parameters
   - Ensures requests missing the `shortcode` parameter return HTTP 400.

3. Unknown and expired shortcodes
   - Ensures unknown shortcodes return HTTP 404 and expired ones HTTP 410,
     neither recording a click.

4. Location headers
   - Ensures location_from_headers() combines language and timezone headers.
"""

import pytest

from localshortener.handlers import redirect_url, location_from_headers


@pytest.fixture
def created(app):
    return app.registry.create('https://example.com/article/123', validity_minutes=1, preferred_shortcode='abc123')


def _event(shortcode='abc123', headers=None) -> dict:
    return {
        'httpMethod': 'GET',
        'path': f'/{shortcode}',
        'pathParameters': {'shortcode': shortcode} if shortcode is not None else None,
        'headers': headers or {},
    }


# -------------------------------
# 1. Successful redirect
# -------------------------------


def test_redirect(app, created):
    """Ensure active shortcodes redirect to the original URL and record a click."""
    response = redirect_url(_event(headers={'Referer': 'https://news.example.org'}), app)

    assert response['statusCode'] == 302
    assert response['headers']['Location'] == 'https://example.com/article/123'
    (click,) = created.clicks
    assert click.source == 'https://news.example.org'
    assert click.user_location == 'en-US/UTC'


def test_redirect_direct_visit_with_location_headers(app, created):
    headers = {'accept-language': 'de-DE,de;q=0.9,en;q=0.8', 'x-timezone': 'Europe/Berlin'}

    redirect_url(_event(headers=headers), app)

    (click,) = created.clicks
    assert click.source == 'direct'
    assert click.user_location == 'de-DE/Europe/Berlin'


# -------------------------------
# 2. Invalid path parameters
# -------------------------------


@pytest.mark.parametrize('shortcode', [None, ''])
def test_missing_shortcode(app, body, shortcode):
    response = redirect_url(_event(shortcode=shortcode), app)

    assert response['statusCode'] == 400
    assert body(response)['errorCode'] == 'MISSING_SHORTCODE'


# -------------------------------
# 3. Unknown and expired shortcodes
# -------------------------------


def test_unknown_shortcode(app, body):
    response = redirect_url(_event(shortcode='nothere'), app)

    assert response['statusCode'] == 404
    assert body(response)['errorCode'] == 'SHORT_URL_NOT_FOUND'
    assert 'http://localhost:3000/nothere' in body(response)['message']


def test_expired_shortcode(app, body, clock, created):
    """Ensure expired links are distinguished from unknown ones and record no click."""
    clock.advance(seconds=61)

    response = redirect_url(_event(), app)

    assert response['statusCode'] == 410
    assert body(response)['errorCode'] == 'SHORT_URL_EXPIRED'
    assert body(response)['originalUrl'] == 'https://example.com/article/123'
    assert created.clicks == []


def test_deleted_shortcode(app, created):
    app.registry.delete('abc123')
    assert redirect_url(_event(), app)['statusCode'] == 404


# -------------------------------
# 4. Location headers
# -------------------------------


@pytest.mark.parametrize(
    'headers, expected',
    [
        ({}, None),
        ({'Accept-Language': 'en-US,en;q=0.9', 'X-Timezone': 'Europe/Sofia'}, 'en-US/Europe/Sofia'),
        ({'Accept-Language': 'fr;q=0.9'}, 'fr/unknown'),
        ({'X-Timezone': 'Asia/Tokyo'}, 'unknown/Asia/Tokyo'),
    ],
)
def test_location_from_headers(headers, expected):
    assert location_from_headers({'headers': headers}) == expected


def test_location_from_event_without_headers():
    assert location_from_headers({'headers': None}) is None
