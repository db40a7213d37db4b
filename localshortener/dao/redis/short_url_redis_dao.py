"""Data Access Object (DAO) implementation for the URL registry in Redis

The whole registry lives under one Redis key as a JSON array, mirroring the
single local-storage slot of the browser application. Redis here is a shared
key-value slot, not a query engine: the registry does all lookups in memory.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving the registry snapshot in Redis.

Example:
    >>> dao = ShortURLRedisDAO(prefix="localshortener:dev")
    >>> dao.save([short_url])
    <ShortURLRedisDAO>
    >>> [url.shortcode for url in dao.load()]
    ['abc123']
"""

from collections.abc import Sequence

from beartype import beartype

from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.helpers import handle_redis_connection_error
from localshortener.dao.serializers import dumps_short_urls, loads_short_urls
from localshortener.models import ShortURLModel


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based registry store

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        load(**kwargs) -> list[ShortURLModel] | None:
            GET the registry key. None if the key doesn't exist.
            Raises DataStoreError on malformed content or connectivity issues.

        save(short_urls: Sequence[ShortURLModel], **kwargs) -> ShortURLRedisDAO:
            SET the registry key to the serialized record set.
            Raises DataStoreError on connectivity issues.
    """

    @handle_redis_connection_error
    def load(self, **kwargs) -> list[ShortURLModel] | None:
        raw = self.redis.get(self.keys.registry_key())
        if raw is None:
            return None
        return loads_short_urls(raw)

    @handle_redis_connection_error
    @beartype
    def save(self, short_urls: Sequence[ShortURLModel], **kwargs) -> 'ShortURLRedisDAO':
        self.redis.set(self.keys.registry_key(), dumps_short_urls(short_urls))
        return self
