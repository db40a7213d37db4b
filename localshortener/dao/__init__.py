from localshortener.dao.base import ShortURLBaseDAO, LogMirrorBaseDAO
from localshortener.dao.memory import ShortURLMemoryDAO, LogMirrorMemoryDAO
from localshortener.dao.file import ShortURLFileDAO, LogMirrorFileDAO
from localshortener.dao.redis import ShortURLRedisDAO, LogMirrorRedisDAO


__all__ = [
    'ShortURLBaseDAO',
    'LogMirrorBaseDAO',
    'ShortURLMemoryDAO',
    'LogMirrorMemoryDAO',
    'ShortURLFileDAO',
    'LogMirrorFileDAO',
    'ShortURLRedisDAO',
    'LogMirrorRedisDAO',
]
