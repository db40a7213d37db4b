from localshortener.dao.memory.short_url_memory_dao import ShortURLMemoryDAO
from localshortener.dao.memory.log_mirror_memory_dao import LogMirrorMemoryDAO


__all__ = [
    'ShortURLMemoryDAO',
    'LogMirrorMemoryDAO',
]
