from typing import Any

from localshortener.dao.serializers import short_url_to_dict
from localshortener.models import ShortURLModel
from localshortener.registry import RegistryStats


def short_url_view(short_url: ShortURLModel, short_url_string: str) -> dict[str, Any]:
    """Render a record the way the statistics view lists it"""
    return {
        **short_url_to_dict(short_url),
        'shortUrl': short_url_string,
        'status': 'expired' if short_url.is_expired else 'active',
        'clickCount': len(short_url.clicks),
    }


def stats_view(stats: RegistryStats) -> dict[str, int]:
    return {
        'totalUrls': stats.total_urls,
        'activeUrls': stats.active_urls,
        'expiredUrls': stats.expired_urls,
        'totalClicks': stats.total_clicks,
    }
