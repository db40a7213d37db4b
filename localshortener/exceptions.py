"""Application-specific exceptions.

Every exception carries an `error_code` so that handlers can report failures
to clients without leaking Python class names.

Classes:
    LocalShortenerError:
        Base exception for all application-specific errors.

    ValidationError:
        Base exception for rejected user input. Subclasses carry the message
        shown to the user.

    ShortcodeGenerationError:
        Raised when no free shortcode could be generated.

    ConfigurationError:
        Base exception for configuration problems.

    LogDeliveryError:
        Describes a failed log delivery. Never propagates out of the log buffer.

Example:
    >>> from localshortener.exceptions import InvalidURLError
    >>> raise InvalidURLError('URL must use HTTP or HTTPS protocol')
    Traceback (most recent call last):
        ...
    localshortener.exceptions.InvalidURLError: URL must use HTTP or HTTPS protocol
"""


class LocalShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:localshortener_error'


class ValidationError(LocalShortenerError):
    """Base exception for rejected user input."""

    error_code = 'validation:validation_error'


class InvalidURLError(ValidationError):
    """Raised when the original URL is not an absolute HTTP(S) URL."""

    error_code = 'INVALID_URL'


class InvalidShortcodeError(ValidationError):
    """Raised when a preferred shortcode has the wrong length or characters."""

    error_code = 'INVALID_SHORTCODE'


class ShortcodeConflictError(ValidationError):
    """Raised when a preferred shortcode is already stored (expired or not)."""

    error_code = 'SHORTCODE_CONFLICT'


class InvalidValidityError(ValidationError):
    """Raised when the validity period is not a positive number of minutes up to one year."""

    error_code = 'INVALID_VALIDITY'


class BatchTooLargeError(ValidationError):
    """Raised when more URLs are submitted at once than allowed."""

    error_code = 'TOO_MANY_URLS'


class ShortcodeGenerationError(LocalShortenerError):
    """Raised when shortcode generation keeps colliding with stored shortcodes."""

    error_code = 'app:shortcode_generation_error'


class ConfigurationError(LocalShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class LogDeliveryError(LocalShortenerError):
    """Raised inside the log buffer when the remote collector rejects an entry."""

    error_code = 'logbuffer:delivery_error'

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
