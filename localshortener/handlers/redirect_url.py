import logging

from localshortener.app import Application
from localshortener.handlers.constants import MISSING_SHORTCODE, SHORT_URL_NOT_FOUND, SHORT_URL_EXPIRED, REDIRECT_SUCCESS
from localshortener.handlers.responses import response_302, response_400, response_404, response_410, guarantee_500_response
from localshortener.registry import LinkStatus
from localshortener.types import HandlerEvent, HandlerResponse


logger = logging.getLogger(__name__)


def _header(event: HandlerEvent, name: str) -> str | None:
    headers = event.get('headers') or {}
    for key, value in headers.items():
        if key.lower() == name.lower():
            return value
    return None


def location_from_headers(event: HandlerEvent) -> str | None:
    """Build the visitor's coarse '<language>/<timezone>' from request headers

    Uses the first `Accept-Language` tag and the `X-Timezone` header. Returns
    None when neither is present, so the registry falls back to its provider.

    Example:
        >>> location_from_headers({'headers': {'Accept-Language': 'en-US,en;q=0.9', 'X-Timezone': 'Europe/Sofia'}})
        'en-US/Europe/Sofia'
    """
    accept_language = _header(event, 'Accept-Language')
    timezone = _header(event, 'X-Timezone')
    if not accept_language and not timezone:
        return None

    language = accept_language.split(',')[0].split(';')[0].strip() if accept_language else ''
    return f'{language or "unknown"}/{timezone or "unknown"}'


@guarantee_500_response
def redirect_url(event: HandlerEvent, app: Application) -> HandlerResponse:
    """Redirect a shortcode to its original URL and record the click

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Look the shortcode up (active, expired or unknown)
    - Step 3: Record the click
    - Step 4: Redirect client to the original URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL
        400: Missing shortcode in path parameters
        404: Shortcode doesn't exist
        410: Shortcode exists but has expired
            originalUrl / expiryDate: the link that is no longer served

    Example:
        >>> event = {'pathParameters': {'shortcode': 'abc123'}, 'headers': {'Referer': 'https://news.example.org'}}
        >>> response = redirect_url(event, app)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/article/123'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Look the shortcode up
    status = app.registry.status(shortcode)
    if status is LinkStatus.NOT_FOUND:
        logger.warning('Shortcode not found. Responding with 404.', extra={'shortCode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message=f"short url {app.short_url_for(shortcode)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    if status is LinkStatus.EXPIRED:
        short_url = app.registry.get(shortcode)
        logger.warning('Attempted to access expired URL. Responding with 410.', extra={'shortCode': shortcode, 'event': SHORT_URL_EXPIRED})
        return response_410(
            message=f'short url {app.short_url_for(shortcode)} has expired',
            error_code=SHORT_URL_EXPIRED,
            originalUrl=short_url.original_url,
            expiryDate=short_url.expiry_date.isoformat(),
        )

    # 3- Record the click
    source = _header(event, 'Referer') or 'direct'
    recorded = app.registry.record_click(shortcode, source=source, user_location=location_from_headers(event))
    if not recorded:  # expired between lookup and click
        logger.error('Failed to record click. Responding with 410.', extra={'shortCode': shortcode, 'event': SHORT_URL_EXPIRED})
        return response_410(message=f'short url {app.short_url_for(shortcode)} has expired', error_code=SHORT_URL_EXPIRED)

    # 4- Redirect client to original URL
    target_url = app.registry.get(shortcode).original_url
    logger.info('Redirecting client to original URL. Responding with 302.', extra={'shortCode': shortcode, 'referrer': source, 'event': REDIRECT_SUCCESS})
    return response_302(location=target_url)
