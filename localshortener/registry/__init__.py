from localshortener.registry.validation import ValidationResult, validate_url, validate_shortcode_format, validate_validity
from localshortener.registry.url_registry import URLRegistry, LinkStatus, RegistryStats, ShortenRequest, ShortenResult


__all__ = [
    'URLRegistry',
    'LinkStatus',
    'RegistryStats',
    'ShortenRequest',
    'ShortenResult',
    'ValidationResult',
    'validate_url',
    'validate_shortcode_format',
    'validate_validity',
]
