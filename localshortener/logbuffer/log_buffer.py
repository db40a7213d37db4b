"""Bounded buffer of structured log entries with best-effort remote delivery

A logging facility must never become a source of application failure. The
log buffer therefore:

    - keeps at most `max_entries` entries in memory, evicting the oldest first;
    - mirrors entries to a second, smaller buffer which is also written to a
      mirror store for out-of-band debugging;
    - relays every entry to a remote collector on a background thread, without
      waiting for the outcome. A failed delivery only adds a 'warn' entry to
      the mirror buffer; it never reaches the caller and never triggers
      another delivery.

Classes:
    LogBuffer:
        The buffer itself.

Example:
    >>> from localshortener.logbuffer import LogBuffer
    >>> with LogBuffer(endpoint='http://localhost:3001/api/logs') as log_buffer:
    ...     log_buffer.info('URLRegistry.create', 'frontend', 'URL shortened successfully', {'shortCode': 'abc123'})
    ...     [entry.message for entry in log_buffer.get_all()]
    ['URL shortened successfully']
"""

import logging
import threading
from collections import deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import Any

from localshortener.constants import Defaults
from localshortener.dao.base import LogMirrorBaseDAO
from localshortener.dao.memory import LogMirrorMemoryDAO
from localshortener.dao.serializers import log_entry_to_dict
from localshortener.exceptions import LogDeliveryError
from localshortener.logbuffer.transport import LogTransport, HTTPLogTransport
from localshortener.models import LogEntry, LogLevel
from localshortener.types import Clock
from localshortener.utils.helpers import utc_now, caller_context


logger = logging.getLogger(__name__)

# Package tag of the entries the buffer writes about itself
LOGBUFFER_PACKAGE = 'LoggingMiddleware'


class LogBuffer:
    """Bounded, mirrored, remotely relayed log buffer

    Attributes:
        transport (LogTransport):
            Delivers one entry per call to the collector.
        mirror_dao (LogMirrorBaseDAO):
            Store receiving the mirror buffer after every change.
        clock (Clock):
            Returns the current aware UTC datetime.

    Methods:
        log(stack, level, package, message, context=None) -> LogEntry
        debug/info/warn/error/fatal(stack, package, message, context=None) -> LogEntry
        log_contract_violation(handler, expected_type, received_value) -> LogEntry
        log_storage_failure(operation, error, stack=None) -> LogEntry
        get_all() -> list[LogEntry]
        get_mirror() -> list[LogEntry]
        clear() -> None
        set_endpoint(endpoint) -> None
        flush(timeout=None) -> bool
        close() -> None
    """

    def __init__(
        self,
        endpoint: str | None = Defaults.LOG_ENDPOINT,
        transport: LogTransport | None = None,
        mirror_dao: LogMirrorBaseDAO | None = None,
        max_entries: int = Defaults.LOG_MAX_ENTRIES,
        mirror_max_entries: int = Defaults.LOG_MIRROR_MAX_ENTRIES,
        executor: Executor | None = None,
        clock: Clock = utc_now,
    ):
        """Initialize a log buffer

        Args:
            endpoint (str | None):
                Collector URL. None disables delivery.
            transport (LogTransport | None):
                Defaults to an HTTPLogTransport.
            mirror_dao (LogMirrorBaseDAO | None):
                Defaults to an in-memory mirror.
            max_entries (int):
                Capacity of the primary buffer. Defaults to 1000.
            mirror_max_entries (int):
                Capacity of the mirror buffer. Defaults to 100.
            executor (Executor | None):
                Runs deliveries. Defaults to a private ThreadPoolExecutor which
                `close()` shuts down; an injected executor is left running.
            clock (Clock):
                Defaults to `utc_now`.

        Raises:
            ValueError: If a capacity is not positive.
        """
        if max_entries <= 0:
            raise ValueError(f'Max entries must be a positive integer (given value: {max_entries}).')
        if mirror_max_entries <= 0:
            raise ValueError(f'Mirror max entries must be a positive integer (given value: {mirror_max_entries}).')

        self.transport = transport if transport is not None else HTTPLogTransport()
        self.mirror_dao = mirror_dao if mirror_dao is not None else LogMirrorMemoryDAO()
        self.clock = clock

        self._endpoint = endpoint
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)
        self._mirror: deque[LogEntry] = deque(maxlen=mirror_max_entries)
        self._lock = threading.RLock()
        self._pending: set[Future] = set()
        self._closed = False

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=Defaults.LOG_DELIVERY_WORKERS,
            thread_name_prefix='logbuffer-delivery',
        )

        self._load_mirror()

    def __enter__(self) -> 'LogBuffer':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def endpoint(self) -> str | None:
        return self._endpoint

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    @property
    def mirror_max_entries(self) -> int:
        return self._mirror.maxlen

    # -------------------------------
    # Logging
    # -------------------------------

    def log(self, stack: str, level: LogLevel | str, package: str, message: str, context: Any = None) -> LogEntry:
        """Buffer an entry and start relaying it to the collector

        Returns as soon as the entry is buffered; delivery happens on a
        background thread and its outcome is never reported to the caller.
        An unknown `level` is logged as 'info' and reported by a 'warn' entry
        in the mirror buffer.

        Args:
            stack (str): Calling context, e.g. 'URLRegistry.create'.
            level (LogLevel | str): One of 'debug', 'info', 'warn', 'error', 'fatal'.
            package (str): Origin tag, e.g. 'frontend'.
            message (str): Descriptive message.
            context (Any): Optional JSON-compatible payload.

        Returns:
            LogEntry: The buffered entry.
        """
        try:
            resolved_level, unknown_level = LogLevel(level), False
        except ValueError:
            resolved_level, unknown_level = LogLevel.INFO, True

        entry = LogEntry(
            timestamp=self.clock(),
            stack=stack,
            level=resolved_level,
            package=package,
            message=message,
            context=context,
        )

        with self._lock:
            self._entries.append(entry)
            self._mirror_append(entry)
            if unknown_level:
                warning = self._internal_warning('LogBuffer.log', f'Unknown log level {level!r}. Logged as info.', entry, {'level': repr(level)})
                self._mirror_append(warning)
            endpoint = self._endpoint
            closed = self._closed

        if endpoint and not closed:
            self._submit(entry, endpoint)
        return entry

    def debug(self, stack: str, package: str, message: str, context: Any = None) -> LogEntry:
        return self.log(stack, LogLevel.DEBUG, package, message, context)

    def info(self, stack: str, package: str, message: str, context: Any = None) -> LogEntry:
        return self.log(stack, LogLevel.INFO, package, message, context)

    def warn(self, stack: str, package: str, message: str, context: Any = None) -> LogEntry:
        return self.log(stack, LogLevel.WARN, package, message, context)

    def error(self, stack: str, package: str, message: str, context: Any = None) -> LogEntry:
        return self.log(stack, LogLevel.ERROR, package, message, context)

    def fatal(self, stack: str, package: str, message: str, context: Any = None) -> LogEntry:
        return self.log(stack, LogLevel.FATAL, package, message, context)

    def log_contract_violation(self, handler: str, expected_type: str, received_value: Any) -> LogEntry:
        """Log a 'received type X, expected type Y' error from `handler`

        Example:
            >>> log_buffer.log_contract_violation('shorten_url', 'int', '30').message
            "shorten_url: received str, expected int"
        """
        message = f'received {type(received_value).__name__}, expected {expected_type}'
        return self.log(
            caller_context(),
            LogLevel.ERROR,
            'backend',
            f'{handler}: {message}',
            {'expectedType': expected_type, 'receivedValue': received_value},
        )

    def log_storage_failure(self, operation: str, error: BaseException | str, stack: str | None = None) -> LogEntry:
        """Log a 'fatal' storage failure of `operation` (e.g. 'load', 'save')

        `stack` defaults to the caller's context.
        """
        return self.log(
            stack if stack is not None else caller_context(),
            LogLevel.FATAL,
            'db',
            'Critical database connection failure.',
            {'operation': operation, 'error': str(error)},
        )

    # -------------------------------
    # Buffers
    # -------------------------------

    def get_all(self) -> list[LogEntry]:
        """Return a copy of the primary buffer, oldest first"""
        with self._lock:
            return list(self._entries)

    def get_mirror(self) -> list[LogEntry]:
        with self._lock:
            return list(self._mirror)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._mirror.clear()
            try:
                self.mirror_dao.clear()
            except Exception:  # noqa: BLE001 mirror store failures never reach the caller
                logger.debug('Failed to clear log mirror store.', exc_info=True)

    def set_endpoint(self, endpoint: str | None) -> None:
        """Deliver subsequent entries to `endpoint` (None disables delivery)

        Entries already buffered, or already being delivered, are unaffected.
        """
        with self._lock:
            self._endpoint = endpoint

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for in-flight deliveries

        Returns:
            bool: True if every delivery finished within `timeout`.
        """
        with self._lock:
            pending = set(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self, timeout: float | None = None) -> None:
        """Stop delivering, wait for in-flight deliveries and release resources

        Entries logged after `close()` are still buffered and mirrored.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        self.flush(timeout=timeout)
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        self.transport.close()

    # -------------------------------
    # Internals
    # -------------------------------

    def _submit(self, entry: LogEntry, endpoint: str) -> None:
        try:
            future = self._executor.submit(self._deliver, entry, endpoint)
        except RuntimeError as e:
            # Executor already shut down (e.g. injected executor closed by its owner)
            self._record_delivery_failure(entry, 'Log collector unavailable', {'error': repr(e)})
            return

        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._discard_pending)

    def _discard_pending(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _deliver(self, entry: LogEntry, endpoint: str) -> None:
        try:
            status_code = self.transport.send(endpoint, log_entry_to_dict(entry))
            if not 200 <= status_code < 300:
                raise LogDeliveryError(f'Failed to send log to collector: {status_code}', status_code=status_code)
        except LogDeliveryError as e:
            self._record_delivery_failure(entry, str(e), {'statusCode': e.status_code})
        except Exception as e:  # noqa: BLE001 any transport failure stays inside the buffer
            self._record_delivery_failure(entry, 'Log collector unavailable', {'error': repr(e)})

    def _record_delivery_failure(self, entry: LogEntry, message: str, details: dict[str, Any]) -> None:
        failure = self._internal_warning('LogBuffer._deliver', message, entry, details)
        with self._lock:
            self._mirror_append(failure)

    def _internal_warning(self, stack: str, message: str, entry: LogEntry, details: dict[str, Any]) -> LogEntry:
        return LogEntry(
            timestamp=self.clock(),
            stack=stack,
            level=LogLevel.WARN,
            package=LOGBUFFER_PACKAGE,
            message=message,
            context={**details, 'originalLog': log_entry_to_dict(entry)},
        )

    def _mirror_append(self, entry: LogEntry) -> None:
        self._mirror.append(entry)
        try:
            self.mirror_dao.save(list(self._mirror))
        except Exception:  # noqa: BLE001 mirror store failures never reach the caller
            logger.debug('Failed to write log mirror store.', exc_info=True)

    def _load_mirror(self) -> None:
        try:
            entries = self.mirror_dao.load()
        except Exception:  # noqa: BLE001 mirror store failures never reach the caller
            logger.debug('Failed to load log mirror store. Starting with an empty mirror.', exc_info=True)
            return
        if entries:
            self._mirror.extend(entries)
