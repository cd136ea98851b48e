"""URL safety validation and viewport normalization."""

from .url_validator import (
    validate_url,
    is_private_ipv4,
    ValidatedUrl,
    UrlValidationError,
    MissingInput,
    MalformedUrl,
    DisallowedScheme,
    BlockedHost,
    PrivateAddress,
)
from .viewport import (
    normalize_viewport,
    parse_full_page,
    ViewportSpec,
    MIN_SIZE,
    MAX_SIZE,
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
)

__all__ = [
    'validate_url',
    'is_private_ipv4',
    'ValidatedUrl',
    'UrlValidationError',
    'MissingInput',
    'MalformedUrl',
    'DisallowedScheme',
    'BlockedHost',
    'PrivateAddress',
    'normalize_viewport',
    'parse_full_page',
    'ViewportSpec',
    'MIN_SIZE',
    'MAX_SIZE',
    'DEFAULT_WIDTH',
    'DEFAULT_HEIGHT',
]
