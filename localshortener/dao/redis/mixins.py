"""Shared Redis client setup for the Redis-backed stores

Both the registry store and the log mirror store hold a single JSON document
under one namespaced key, so they share everything except the key they use.

Example:
    >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    ...     pass
    ...
    >>> dao = ShortURLRedisDAO(redis_host='localhost', prefix='localshortener:dev')
    >>> dao.keys.registry_key()
    'localshortener:dev:shortened-urls'
"""

import redis

from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.redis.helpers import CONNECTIVITY_ERRORS, redis_location
from localshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Connect to Redis (or adopt a client) and verify the connection

    Attributes:
        redis (redis.Redis):
            Client used by the store. Responses are decoded to str by default,
            which is what the JSON deserializers expect.
        keys (RedisKeySchema):
            Namespaced key names.
    """

    def __init__(
        self,
        redis_host: str | None = 'localhost',
        redis_port: int | str | None = 6379,
        redis_db: int | str | None = 0,
        redis_decode_responses: bool | None = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Initialize a Redis-backed store

        Connection parameters carry a `redis_` prefix so they can be passed
        straight from the `store.redis` configuration section. Ports and
        database indexes given as strings (environment variables) are
        converted to int.

        Args:
            redis_client (redis.Redis | None):
                Pre-initialized client. The connection parameters are ignored
                when one is given.
            prefix (str | None):
                Namespace for the store's key, e.g. 'localshortener:dev'.

        Raises:
            DataStoreError:
                If Redis doesn't answer the initial PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True if Redis answered. False only when `raise_error` is False.

        Raises:
            DataStoreError: If Redis is unreachable and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except CONNECTIVITY_ERRORS as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
