"""Utility functions for application configuration management.

Configuration is assembled from three layers, later layers winning:

    1. Built-in defaults (see `DEFAULT_CONFIG`).
    2. A YAML file: the path in `LOCALSHORTENER_CONFIG`, or
       `config/<APP_ENV>.yml` under the project root when that file exists.
    3. Environment variables (names in `localshortener.constants.ENV`).

The resulting dictionary follows this structure:

    {
        "app": {
            "base_url": "http://localhost:3000"
        },
        "store": {
            "backend": "memory" | "file" | "redis",
            "path": "data/shortened-urls.json",
            "redis": {"host": ..., "port": ..., "db": ..., "username": ..., "password": ...}
        },
        "logbuffer": {
            "endpoint": "http://localhost:3001/api/logs" | None,
            "max_entries": 1000,
            "mirror_max_entries": 100,
            "mirror_backend": "memory" | "file" | "redis",
            "mirror_path": "data/logging-middleware-logs.json",
            "delivery_timeout": 5
        }
    }

A YAML file for a local file-backed setup looks like this:

    store:
      backend: file
      path: /var/lib/localshortener/shortened-urls.json
    logbuffer:
      endpoint: http://localhost:3001/api/logs

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), `'local'` by default.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the Redis key prefix `<app name>:<app env>`, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the project root directory, using `PROJECT_ROOT` when available.

    load_config(path=None) -> dict
        Assemble and validate the configuration dictionary.

Example:
    >>> from localshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['store']['backend']
    'memory'
"""

import os
import copy
import logging
from os import PathLike
from pathlib import Path
from typing import Any

import yaml

from localshortener.constants import ENV, Defaults
from localshortener.exceptions import BadConfigurationError
from localshortener.types import AppConfig


logger = logging.getLogger(__name__)

STORE_BACKENDS = frozenset({'memory', 'file', 'redis'})

DEFAULT_CONFIG: AppConfig = {
    'app': {
        'base_url': Defaults.BASE_URL,
    },
    'store': {
        'backend': Defaults.STORE_BACKEND,
        'path': Defaults.STORE_PATH,
        'redis': {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
            'username': None,
            'password': None,
        },
    },
    'logbuffer': {
        'endpoint': Defaults.LOG_ENDPOINT,
        'max_entries': Defaults.LOG_MAX_ENTRIES,
        'mirror_max_entries': Defaults.LOG_MIRROR_MAX_ENTRIES,
        'mirror_backend': Defaults.STORE_BACKEND,
        'mirror_path': Defaults.MIRROR_PATH,
        'delivery_timeout': Defaults.LOG_DELIVERY_TIMEOUT,
    },
}

# (section, key) pairs overridden by environment variables
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    ENV.App.BASE_URL: ('app', 'base_url'),
    ENV.Store.BACKEND: ('store', 'backend'),
    ENV.Store.PATH: ('store', 'path'),
    ENV.Store.REDIS_HOST: ('store', 'redis', 'host'),
    ENV.Store.REDIS_PORT: ('store', 'redis', 'port'),
    ENV.Store.REDIS_DB: ('store', 'redis', 'db'),
    ENV.Store.REDIS_USERNAME: ('store', 'redis', 'username'),
    ENV.Store.REDIS_PASSWORD: ('store', 'redis', 'password'),
    ENV.LogBuffer.ENDPOINT: ('logbuffer', 'endpoint'),
    ENV.LogBuffer.MAX_ENTRIES: ('logbuffer', 'max_entries'),
    ENV.LogBuffer.MIRROR_MAX_ENTRIES: ('logbuffer', 'mirror_max_entries'),
    ENV.LogBuffer.MIRROR_BACKEND: ('logbuffer', 'mirror_backend'),
    ENV.LogBuffer.MIRROR_PATH: ('logbuffer', 'mirror_path'),
    ENV.LogBuffer.DELIVERY_TIMEOUT: ('logbuffer', 'delivery_timeout'),
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'localshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'localshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable, falling back to the current
    working directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd()))


def config_path() -> Path | None:
    """Locate the YAML configuration file, if any

    Returns:
        Path | None:
            `LOCALSHORTENER_CONFIG` when set (whether or not the file exists),
            else `config/<APP_ENV>.yml` under the project root if it exists,
            else None.
    """
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit)

    candidate = project_root() / 'config' / f'{app_env()}.yml'
    return candidate if candidate.is_file() else None


def load_yaml_config(path: str | PathLike) -> dict[str, Any]:
    """Read a YAML configuration file

    Raises:
        BadConfigurationError:
            If the file can't be read, isn't valid YAML, or isn't a mapping.
    """
    try:
        with open(path, encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise BadConfigurationError(f"Can't read configuration file {path}.") from e
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Configuration file {path} is not valid YAML.') from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping (given type: {type(document).__name__}).')
    return document


def load_config(path: str | PathLike | None = None) -> AppConfig:
    """Assemble the application configuration

    Args:
        path (str | PathLike | None):
            Explicit YAML file. Defaults to `config_path()`.

    Returns:
        dict: The merged and validated configuration.

    Raises:
        BadConfigurationError:
            If the YAML file is unreadable or any value is invalid.

    Example:
        >>> os.environ['STORE_BACKEND'] = 'file'
        >>> load_config()['store']['backend']
        'file'
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = path if path is not None else config_path()
    if path is not None:
        logger.debug('Loading configuration file.', extra={'configPath': str(path)})
        _deep_merge(config, load_yaml_config(path))

    for name, location in ENV_OVERRIDES.items():
        value = os.environ.get(name)
        if value is not None:
            _set_nested(config, location, value)

    return _validate(config)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _set_nested(config: dict[str, Any], location: tuple[str, ...], value: Any) -> None:
    *parents, leaf = location
    section = config
    for parent in parents:
        section = section.setdefault(parent, {})
    section[leaf] = value


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"'{name}' must be an integer (given value: {value!r}).") from e
    if number <= 0:
        raise BadConfigurationError(f"'{name}' must be positive (given value: {value!r}).")
    return number


def _backend(value: Any, name: str) -> str:
    backend = str(value).lower()
    if backend not in STORE_BACKENDS:
        raise BadConfigurationError(f"'{name}' must be one of {sorted(STORE_BACKENDS)} (given value: {value!r}).")
    return backend


def _validate(config: AppConfig) -> AppConfig:
    store = config['store']
    store['backend'] = _backend(store['backend'], 'store.backend')
    store['redis']['port'] = _positive_int(store['redis']['port'], 'store.redis.port')
    try:
        store['redis']['db'] = int(store['redis']['db'])
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"'store.redis.db' must be an integer (given value: {store['redis']['db']!r}).") from e

    logbuffer = config['logbuffer']
    logbuffer['endpoint'] = logbuffer['endpoint'] or None  # empty string disables delivery
    logbuffer['max_entries'] = _positive_int(logbuffer['max_entries'], 'logbuffer.max_entries')
    logbuffer['mirror_max_entries'] = _positive_int(logbuffer['mirror_max_entries'], 'logbuffer.mirror_max_entries')
    logbuffer['mirror_backend'] = _backend(logbuffer['mirror_backend'], 'logbuffer.mirror_backend')
    logbuffer['delivery_timeout'] = _positive_int(logbuffer['delivery_timeout'], 'logbuffer.delivery_timeout')

    if not config['app'].get('base_url'):
        raise BadConfigurationError("'app.base_url' must be a non-empty string.")
    return config
