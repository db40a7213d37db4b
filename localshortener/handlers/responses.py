import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from localshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from localshortener.types import HandlerResponse


logger = logging.getLogger(__name__)

JSON_HEADERS = {'Content-Type': 'application/json'}


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> HandlerResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: dict[str, Any]) -> HandlerResponse:
    return _response(200, body)


def response_302(*, location: str) -> HandlerResponse:
    return _response(302, {}, headers={'Location': location})  # no body needed for redirects


def response_400(message: str | None = None, error_code: str | None = None, **extra: Any) -> HandlerResponse:
    return _response(400, {**_error_body('Bad Request', message, error_code), **extra})


def response_404(message: str | None = None, error_code: str | None = None) -> HandlerResponse:
    return _response(404, _error_body('Not Found', message, error_code))


def response_405(*, allowed: list[str], error_code: str | None = None) -> HandlerResponse:
    return _response(405, _error_body('Method Not Allowed', None, error_code), headers={'Allow': ', '.join(allowed)})


def response_410(message: str | None = None, error_code: str | None = None, **extra: Any) -> HandlerResponse:
    return _response(410, {**_error_body('Gone', message, error_code), **extra})


def response_500(message: str | None = None) -> HandlerResponse:
    return _response(500, _error_body('Internal Server Error', message, UNKNOWN_INTERNAL_SERVER_ERROR))


def guarantee_500_response(handler: Callable[..., HandlerResponse]) -> Callable[..., HandlerResponse]:
    """Decorator: turn any unexpected exception of a handler into a logged 500 response

    Example:
        >>> @guarantee_500_response
        ... def handler(event, app):
        ...     raise RuntimeError('boom')
        >>> handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(*args, **kwargs) -> HandlerResponse:
        try:
            return handler(*args, **kwargs)
        except Exception:
            logger.exception('Unhandled exception in handler. Responding with 500.', extra={'handler': handler.__name__})
            return response_500()

    return wrapper
