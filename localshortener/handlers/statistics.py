import logging

from localshortener.app import Application
from localshortener.handlers.constants import SHORT_URL_NOT_FOUND, METHOD_NOT_ALLOWED
from localshortener.handlers.responses import response_200, response_404, response_405, guarantee_500_response
from localshortener.handlers.views import short_url_view, stats_view
from localshortener.types import HandlerEvent, HandlerResponse


logger = logging.getLogger(__name__)

ALLOWED_METHODS = ['GET', 'DELETE']


@guarantee_500_response
def statistics(event: HandlerEvent, app: Application) -> HandlerResponse:
    """List, inspect and delete shortened URLs

    Routes:
        GET                     -> aggregate stats and every record, newest first
        GET    {shortcode}      -> one record with its click history
        DELETE {shortcode}      -> delete one record
        DELETE                  -> delete every record

    HTTP responses:
        200: Success
        404: Shortcode doesn't exist
        405: Any other method
    """
    method = (event.get('httpMethod') or 'GET').upper()
    shortcode = (event.get('pathParameters') or {}).get('shortcode')

    if method == 'GET' and shortcode:
        short_url = app.registry.get(shortcode)
        if short_url is None:
            return response_404(message=f"short url {app.short_url_for(shortcode)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
        return response_200({'url': short_url_view(short_url, app.short_url_for(shortcode))})

    if method == 'GET':
        short_urls = app.registry.list_urls()
        logger.info('Loaded %s URLs for statistics.', len(short_urls), extra={'count': len(short_urls)})
        return response_200(
            {
                'stats': stats_view(app.registry.stats()),
                'urls': [short_url_view(short_url, app.short_url_for(short_url.shortcode)) for short_url in short_urls],
            }
        )

    if method == 'DELETE' and shortcode:
        if not app.registry.delete(shortcode):
            return response_404(message=f"short url {app.short_url_for(shortcode)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
        return response_200({'message': f'Deleted {shortcode}', 'shortCode': shortcode})

    if method == 'DELETE':
        app.registry.clear()
        return response_200({'message': 'All URLs cleared'})

    return response_405(allowed=ALLOWED_METHODS, error_code=METHOD_NOT_ALLOWED)
