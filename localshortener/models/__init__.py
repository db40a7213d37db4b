from localshortener.models.short_url_model import ShortURLModel, ClickModel
from localshortener.models.log_entry_model import LogEntry, LogLevel


__all__ = [
    'ShortURLModel',
    'ClickModel',
    'LogEntry',
    'LogLevel',
]
