import functools
import redis

from localshortener.dao.exceptions import DataStoreError


__all__ = []

# Errors meaning "Redis is unreachable", as opposed to a rejected command
CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    """Describe where `client` connects to as '<host>:<port>/<db>'"""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Turn Redis errors raised by a DAO method into DataStoreError

    The registry and the log buffer only know about DataStoreError, so a
    Redis outage degrades the same way a missing file or a full disk does.
    Commands rejected by the server (e.g. OOM, READONLY or WRONGTYPE replies)
    are reported the same way.

    Example:
        >>> @handle_redis_connection_error
        ... def load(self):
        ...     return self.redis.get(self.keys.registry_key())
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} rejected the command: {e}') from e

    return wrapper
