"""Validation of user input for shortened URLs

Validators never raise: they return a `ValidationResult` carrying the error
that `URLRegistry.create()` would raise, so a form can show every problem
before anything is submitted.

Functions:
    validate_url(candidate) -> ValidationResult
    validate_shortcode_format(candidate) -> ValidationResult
    validate_validity(minutes) -> ValidationResult

Example:
    >>> validate_url('ftp://example.com').is_valid
    False
    >>> validate_url('ftp://example.com').message
    'URL must use HTTP or HTTPS protocol'
"""

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from localshortener.constants import Limits
from localshortener.exceptions import ValidationError, InvalidURLError, InvalidShortcodeError, InvalidValidityError


ALLOWED_SCHEMES = frozenset({'http', 'https'})
SHORTCODE_PATTERN = re.compile(r'[a-zA-Z0-9]+')

# User-facing messages
INVALID_URL_MESSAGE = 'Please enter a valid URL'
INVALID_SCHEME_MESSAGE = 'URL must use HTTP or HTTPS protocol'
INVALID_SHORTCODE_CHARS_MESSAGE = 'Shortcode must contain only alphanumeric characters'
INVALID_SHORTCODE_LENGTH_MESSAGE = (
    f'Shortcode must be between {Limits.SHORTCODE_MIN_LENGTH} and {Limits.SHORTCODE_MAX_LENGTH} characters'
)
SHORTCODE_TAKEN_MESSAGE = 'This shortcode is already taken'
INVALID_VALIDITY_MESSAGE = 'Validity period must be a positive integer'
VALIDITY_TOO_LONG_MESSAGE = 'Validity period cannot exceed 1 year'


@dataclass(frozen=True)
class ValidationResult:
    error: ValidationError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return None if self.error is None else str(self.error)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


VALID = ValidationResult()


def validate_url(candidate: Any) -> ValidationResult:
    """Check that `candidate` is an absolute HTTP(S) URL

    A string without a scheme, or an HTTP(S) URL without a host, is not a
    valid URL; a parseable URL with another scheme gets the protocol message.
    """
    if not isinstance(candidate, str) or not candidate.strip():
        return ValidationResult(InvalidURLError(INVALID_URL_MESSAGE))

    try:
        components = urlparse(candidate.strip())
    except ValueError:
        return ValidationResult(InvalidURLError(INVALID_URL_MESSAGE))

    if not components.scheme:
        return ValidationResult(InvalidURLError(INVALID_URL_MESSAGE))
    if components.scheme.lower() not in ALLOWED_SCHEMES:
        return ValidationResult(InvalidURLError(INVALID_SCHEME_MESSAGE))
    if not components.netloc or not components.hostname:
        return ValidationResult(InvalidURLError(INVALID_URL_MESSAGE))
    return VALID


def validate_shortcode_format(candidate: Any) -> ValidationResult:
    """Check a preferred shortcode's characters and length

    `None` and the empty string are valid: they ask for a generated shortcode.
    Uniqueness is checked by `URLRegistry.validate_shortcode()`.
    """
    if candidate is None or candidate == '':
        return VALID
    if not isinstance(candidate, str) or not SHORTCODE_PATTERN.fullmatch(candidate):
        return ValidationResult(InvalidShortcodeError(INVALID_SHORTCODE_CHARS_MESSAGE))
    if not Limits.SHORTCODE_MIN_LENGTH <= len(candidate) <= Limits.SHORTCODE_MAX_LENGTH:
        return ValidationResult(InvalidShortcodeError(INVALID_SHORTCODE_LENGTH_MESSAGE))
    return VALID


def validate_validity(minutes: Any) -> ValidationResult:
    # bool is an int subclass, but True minutes is not a validity period
    if not isinstance(minutes, int) or isinstance(minutes, bool) or minutes <= 0:
        return ValidationResult(InvalidValidityError(INVALID_VALIDITY_MESSAGE))
    if minutes > Limits.MAX_VALIDITY_MINUTES:
        return ValidationResult(InvalidValidityError(VALIDITY_TOO_LONG_MESSAGE))
    return VALID
