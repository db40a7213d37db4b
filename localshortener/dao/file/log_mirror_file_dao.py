from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from beartype import beartype

from localshortener.dao.base import LogMirrorBaseDAO
from localshortener.dao.file.helpers import handle_file_error, read_text_or_none, atomic_write_text
from localshortener.dao.serializers import dumps_log_entries, loads_log_entries
from localshortener.models import LogEntry


class LogMirrorFileDAO(LogMirrorBaseDAO):
    """File-backed log mirror"""

    def __init__(self, path: str | PathLike):
        self.path = Path(path)

    @handle_file_error
    def load(self, **kwargs) -> list[LogEntry] | None:
        raw = read_text_or_none(self.path)
        if raw is None:
            return None
        return loads_log_entries(raw)

    @handle_file_error
    @beartype
    def save(self, entries: Sequence[LogEntry], **kwargs) -> 'LogMirrorFileDAO':
        atomic_write_text(self.path, dumps_log_entries(entries))
        return self

    @handle_file_error
    def clear(self, **kwargs) -> 'LogMirrorFileDAO':
        self.path.unlink(missing_ok=True)
        return self
