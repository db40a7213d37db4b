import json
import logging
from typing import Any

from localshortener.app import Application
from localshortener.constants import Defaults
from localshortener.exceptions import BatchTooLargeError
from localshortener.handlers.constants import INVALID_JSON_BODY
from localshortener.handlers.responses import response_200, response_400, guarantee_500_response
from localshortener.handlers.views import short_url_view
from localshortener.registry import ShortenRequest, ShortenResult
from localshortener.types import HandlerEvent, HandlerResponse


logger = logging.getLogger(__name__)


def _parse_rows(body: Any) -> list[dict[str, Any]] | None:
    rows = body.get('urls', [body]) if isinstance(body, dict) else None
    if not isinstance(rows, list) or not rows or not all(isinstance(row, dict) for row in rows):
        return None
    return rows


def _to_request(row: dict[str, Any], app: Application) -> ShortenRequest:
    validity_minutes = row.get('validity_minutes', Defaults.VALIDITY_MINUTES)
    if not isinstance(validity_minutes, int) or isinstance(validity_minutes, bool):
        app.log_buffer.log_contract_violation('shorten_url', 'int', validity_minutes)

    return ShortenRequest(
        original_url=row.get('original_url'),
        validity_minutes=validity_minutes,
        preferred_shortcode=row.get('preferred_shortcode') or None,
    )


def _result_view(result: ShortenResult, app: Application) -> dict[str, Any]:
    if result.ok:
        return short_url_view(result.short_url, app.short_url_for(result.short_url.shortcode))
    return {
        'originalUrl': result.request.original_url,
        'errorCode': result.error.error_code,
        'message': str(result.error),
    }


@guarantee_500_response
def shorten_url(event: HandlerEvent, app: Application) -> HandlerResponse:
    """Shorten one or more URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON body (one object, or {"urls": [...]} with up to 5 objects)
    - Step 2: Create every row through the registry
    - Step 3: Respond with the created links and per-row errors

    Request body rows:
        original_url (str): URL to shorten (required)
        validity_minutes (int): minutes until expiry, defaults to 30
        preferred_shortcode (str): custom shortcode, optional

    HTTP responses:
        200: Every row was shortened
            urls: created links
        400: Bad client request
            message / errorCode: invalid JSON body or too many URLs
            urls: per-row results when at least one row was rejected
                  (rows without an error were created)

    Example:
        >>> event = {'body': '{"original_url": "https://example.com", "preferred_shortcode": "abc123"}'}
        >>> response = shorten_url(event, app)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['urls'][0]['shortUrl']
        'http://localhost:3000/abc123'
    """
    # 1- Parse request body
    try:
        body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    rows = _parse_rows(body)
    if rows is None:
        logger.info('No URL rows in body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message="expected a URL object or a non-empty 'urls' list", error_code=INVALID_JSON_BODY)

    # 2- Create every row
    try:
        results = app.registry.create_many(_to_request(row, app) for row in rows)
    except BatchTooLargeError as e:
        logger.info('Too many URLs in one request. Responding with 400.', extra={'event': e.error_code, 'count': len(rows)})
        return response_400(message=str(e), error_code=e.error_code)

    # 3- Respond
    urls = [_result_view(result, app) for result in results]
    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.info('Rejected %s of %s URLs. Responding with 400.', failed, len(results))
        return response_400(message=f'{failed} of {len(results)} URLs were rejected', urls=urls)

    return response_200({'message': f'Successfully shortened {len(results)} URL(s)', 'urls': urls})
