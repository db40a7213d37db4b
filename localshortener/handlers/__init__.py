from localshortener.handlers.shorten_url import shorten_url
from localshortener.handlers.redirect_url import redirect_url, location_from_headers
from localshortener.handlers.statistics import statistics


__all__ = [
    'shorten_url',
    'redirect_url',
    'location_from_headers',
    'statistics',
]
