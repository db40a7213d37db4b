from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from localshortener.dao.redis.log_mirror_redis_dao import LogMirrorRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
    'LogMirrorRedisDAO',
]
