"""Bridge from the standard logging module into a LogBuffer

The registry (and every other module) logs through `logging.getLogger(__name__)`.
Attaching a `LogBufferHandler` to a logger forwards those records into the log
buffer, so the buffer sees them without the registry knowing it exists.

Level mapping:
    DEBUG -> debug, INFO -> info, WARNING -> warn, ERROR -> error, CRITICAL -> fatal

Records carrying a DataStoreError become `LogBuffer.log_storage_failure()`
entries ('fatal', package 'db'), with the record's `operation` extra naming
the failed store operation.

Example:
    >>> handler = LogBufferHandler(log_buffer)
    >>> logging.getLogger('localshortener').addHandler(handler)
    >>> logging.getLogger('localshortener.registry').warning('Attempted to access expired URL.', extra={'shortCode': 'abc123'})
    >>> log_buffer.get_all()[-1].level
    <LogLevel.WARN: 'warn'>
"""

import logging

from localshortener.dao.exceptions import DataStoreError
from localshortener.logbuffer.log_buffer import LogBuffer
from localshortener.models import LogLevel
from localshortener.utils.logging import JsonFormatter


# Records from the log buffer's own modules would feed the buffer back into itself
IGNORED_LOGGER_PREFIX = 'localshortener.logbuffer'


def level_for(levelno: int) -> LogLevel:
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class LogBufferHandler(logging.Handler):
    """logging.Handler writing records to a LogBuffer

    Attributes:
        log_buffer (LogBuffer):
            Destination of the forwarded records.
    """

    def __init__(self, log_buffer: LogBuffer, level: int = logging.NOTSET):
        super().__init__(level=level)
        self.log_buffer = log_buffer
        self.addFilter(lambda record: not record.name.startswith(IGNORED_LOGGER_PREFIX))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stack = f'{record.module}.{record.funcName}:{record.lineno}'
            error = record.exc_info[1] if record.exc_info else None
            if isinstance(error, DataStoreError):
                operation = getattr(record, 'operation', record.funcName)
                self.log_buffer.log_storage_failure(operation, error, stack=stack)
                return

            context = JsonFormatter.extras(record)
            if record.exc_info:
                context['exception'] = logging.Formatter().formatException(record.exc_info)

            self.log_buffer.log(
                stack=stack,
                level=level_for(record.levelno),
                package=record.name,
                message=record.getMessage(),
                context=context or None,
            )
        except Exception:  # noqa: BLE001 logging.Handler contract
            self.handleError(record)
