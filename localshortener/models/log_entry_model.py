from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class LogLevel(StrEnum):
    DEBUG = 'debug'
    INFO = 'info'
    WARN = 'warn'
    ERROR = 'error'
    FATAL = 'fatal'


# fmt: off
@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime       # Moment the entry was built (UTC)
    stack: str                # Calling context, e.g. 'URLRegistry.create'
    level: LogLevel           # One of the fixed levels
    package: str              # Origin tag, e.g. 'frontend', 'db'
    message: str
    context: Any = None       # Optional free-form payload
# fmt: on
