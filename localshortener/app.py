"""Application wiring

Builds one URL registry and one log buffer from configuration and ties their
lifecycles together. There are no module-level instances: a process creates an
`Application` at startup and closes it at shutdown.

Example:
    >>> from localshortener.app import Application
    >>> with Application.from_config() as app:
    ...     short_url = app.registry.create('https://example.com', validity_minutes=30)
    ...     app.short_url_for(short_url.shortcode)
    'http://localhost:3000/Xq3mT0'
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from localshortener.dao.base import ShortURLBaseDAO, LogMirrorBaseDAO
from localshortener.dao.memory import ShortURLMemoryDAO, LogMirrorMemoryDAO
from localshortener.dao.file import ShortURLFileDAO, LogMirrorFileDAO
from localshortener.dao.redis import ShortURLRedisDAO, LogMirrorRedisDAO
from localshortener.logbuffer import LogBuffer, LogBufferHandler, HTTPLogTransport
from localshortener.registry import URLRegistry
from localshortener.types import AppConfig
from localshortener.utils.config import load_config, app_prefix
from localshortener.utils.helpers import get_short_url


logger = logging.getLogger(__name__)

# Records of this logger (and its children) are forwarded to the log buffer
ROOT_LOGGER_NAME = 'localshortener'


def _redis_kwargs(config: AppConfig) -> dict[str, Any]:
    return {f'redis_{k}': v for k, v in config['store']['redis'].items()}


def build_short_url_dao(config: AppConfig) -> ShortURLBaseDAO:
    backend = config['store']['backend']
    if backend == 'file':
        return ShortURLFileDAO(path=config['store']['path'])
    if backend == 'redis':
        return ShortURLRedisDAO(**_redis_kwargs(config), prefix=app_prefix())
    return ShortURLMemoryDAO()


def build_log_mirror_dao(config: AppConfig) -> LogMirrorBaseDAO:
    backend = config['logbuffer']['mirror_backend']
    if backend == 'file':
        return LogMirrorFileDAO(path=config['logbuffer']['mirror_path'])
    if backend == 'redis':
        return LogMirrorRedisDAO(**_redis_kwargs(config), prefix=app_prefix())
    return LogMirrorMemoryDAO()


def build_log_buffer(config: AppConfig) -> LogBuffer:
    settings = config['logbuffer']
    return LogBuffer(
        endpoint=settings['endpoint'],
        transport=HTTPLogTransport(timeout=settings['delivery_timeout']),
        mirror_dao=build_log_mirror_dao(config),
        max_entries=settings['max_entries'],
        mirror_max_entries=settings['mirror_max_entries'],
    )


@dataclass
class Application:
    """One registry and one log buffer, wired together through logging

    The log buffer is created first and attached to the 'localshortener'
    logger, so the registry's own load/save messages reach it.

    Attributes:
        registry (URLRegistry)
        log_buffer (LogBuffer)
        base_url (str):
            Public base URL of the redirect entry point.
    """

    registry: URLRegistry
    log_buffer: LogBuffer
    base_url: str
    handler: LogBufferHandler | None = field(default=None, repr=False)

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> 'Application':
        """Build an application from `config` (defaults to `load_config()`)

        Raises:
            BadConfigurationError: If the configuration is invalid.
            DataStoreError: If a Redis backend is configured but unreachable.
        """
        config = config if config is not None else load_config()

        log_buffer = build_log_buffer(config)
        handler = LogBufferHandler(log_buffer, level=logging.INFO)
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.addHandler(handler)
        # INFO records must pass the logger's own level to reach the handler
        if package_logger.getEffectiveLevel() > logging.INFO:
            package_logger.setLevel(logging.INFO)

        try:
            registry = URLRegistry(build_short_url_dao(config))
        except Exception:
            package_logger.removeHandler(handler)
            log_buffer.close()
            raise

        logger.info('Application started.', extra={'storeBackend': config['store']['backend']})
        return cls(registry=registry, log_buffer=log_buffer, base_url=config['app']['base_url'], handler=handler)

    def __enter__(self) -> 'Application':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def short_url_for(self, shortcode: str) -> str:
        return get_short_url(shortcode, self.base_url)

    def close(self, timeout: float | None = None) -> None:
        """Detach the logging bridge and flush the log buffer"""
        if self.handler is not None:
            logging.getLogger(ROOT_LOGGER_NAME).removeHandler(self.handler)
            self.handler = None
        self.log_buffer.close(timeout=timeout)
