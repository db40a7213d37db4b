from collections.abc import MutableMapping, Sequence

from beartype import beartype

from localshortener.constants import LOG_MIRROR_SLOT
from localshortener.dao.base import LogMirrorBaseDAO
from localshortener.dao.serializers import dumps_log_entries, loads_log_entries
from localshortener.models import LogEntry


class LogMirrorMemoryDAO(LogMirrorBaseDAO):
    """Mapping-backed log mirror, the counterpart of a session-storage slot"""

    def __init__(self, storage: MutableMapping[str, str] | None = None, key: str = LOG_MIRROR_SLOT):
        self.storage = storage if storage is not None else {}
        self.key = key

    def load(self, **kwargs) -> list[LogEntry] | None:
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        return loads_log_entries(raw)

    @beartype
    def save(self, entries: Sequence[LogEntry], **kwargs) -> 'LogMirrorMemoryDAO':
        self.storage[self.key] = dumps_log_entries(entries)
        return self

    def clear(self, **kwargs) -> 'LogMirrorMemoryDAO':
        self.storage.pop(self.key, None)
        return self
