import string
from enum import StrEnum


class Limits:
    """Validation bounds for shortened URLs."""

    SHORTCODE_MIN_LENGTH = 3
    SHORTCODE_MAX_LENGTH = 20
    GENERATED_SHORTCODE_LENGTH = 6
    MAX_SHORTCODE_ATTEMPTS = 1_000  # Guard against a saturated shortcode space
    MAX_VALIDITY_MINUTES = 525_600  # 60 * 24 * 365
    MAX_BATCH_SIZE = 5  # URLs per shorten request


class Defaults:
    """Default values used when configuration is silent."""

    VALIDITY_MINUTES = 30
    BASE_URL = 'http://localhost:3000'
    LOG_ENDPOINT = 'http://localhost:3001/api/logs'
    LOG_MAX_ENTRIES = 1_000
    LOG_MIRROR_MAX_ENTRIES = 100
    LOG_DELIVERY_TIMEOUT = 5  # seconds
    LOG_DELIVERY_WORKERS = 2
    STORE_BACKEND = 'memory'
    STORE_PATH = 'data/shortened-urls.json'
    MIRROR_PATH = 'data/logging-middleware-logs.json'


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

# Store slot names (file names, Redis keys)
REGISTRY_SLOT = 'shortened-urls'
LOG_MIRROR_SLOT = 'logging-middleware-logs'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        CONFIG_PATH = 'LOCALSHORTENER_CONFIG'
        BASE_URL = 'BASE_URL'
        LOG_LEVEL = 'LOG_LEVEL'

    class Store(StrEnum):
        BACKEND = 'STORE_BACKEND'
        PATH = 'STORE_PATH'
        REDIS_HOST = 'REDIS_HOST'
        REDIS_PORT = 'REDIS_PORT'
        REDIS_DB = 'REDIS_DB'
        REDIS_USERNAME = 'REDIS_USERNAME'
        REDIS_PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class LogBuffer(StrEnum):
        ENDPOINT = 'LOG_ENDPOINT'
        MAX_ENTRIES = 'LOG_MAX_ENTRIES'
        MIRROR_MAX_ENTRIES = 'LOG_MIRROR_MAX_ENTRIES'
        MIRROR_BACKEND = 'LOG_MIRROR_BACKEND'
        MIRROR_PATH = 'LOG_MIRROR_PATH'
        DELIVERY_TIMEOUT = 'LOG_DELIVERY_TIMEOUT'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
