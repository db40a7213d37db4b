"""Application-wide logging initialization

Call `initialize_logging()` once at process start. Every module logs through
`logging.getLogger(__name__)` and passes structured fields with `extra=`;
`JsonFormatter` turns each record into one JSON line on stdout:

    {"timestamp": "2025-10-15T12:00:00.000Z", "level": "INFO",
     "logger": "localshortener.registry.url_registry",
     "message": "URL shortened successfully.", "shortCode": "abc123"}

`localshortener.app.Application` additionally forwards records to the log
buffer through `LogBufferHandler`, which reuses `JsonFormatter.extras()`.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from localshortener.constants import ENV


# Attributes every LogRecord has; anything else was passed through `extra=`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON, extras included"""

    @staticmethod
    def extras(record: logging.LogRecord) -> dict[str, Any]:
        return {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.extras(record),
        }
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # extras may hold datetimes, exceptions, paths...
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Send JSON records to stdout at `level` (defaults to $LOG_LEVEL, else INFO)"""
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
