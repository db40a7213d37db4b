from collections.abc import Sequence

from beartype import beartype

from localshortener.dao.base import LogMirrorBaseDAO
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.helpers import handle_redis_connection_error
from localshortener.dao.serializers import dumps_log_entries, loads_log_entries
from localshortener.models import LogEntry


class LogMirrorRedisDAO(RedisClientMixin, LogMirrorBaseDAO):
    """Redis-based log mirror (one key holding a JSON array of entries)"""

    @handle_redis_connection_error
    def load(self, **kwargs) -> list[LogEntry] | None:
        raw = self.redis.get(self.keys.log_mirror_key())
        if raw is None:
            return None
        return loads_log_entries(raw)

    @handle_redis_connection_error
    @beartype
    def save(self, entries: Sequence[LogEntry], **kwargs) -> 'LogMirrorRedisDAO':
        self.redis.set(self.keys.log_mirror_key(), dumps_log_entries(entries))
        return self

    @handle_redis_connection_error
    def clear(self, **kwargs) -> 'LogMirrorRedisDAO':
        self.redis.delete(self.keys.log_mirror_key())
        return self
