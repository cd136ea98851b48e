"""HTTP layer: FastAPI app and RapidAPI gateway authentication."""

from .app import create_app
from .errors import ApiError
from .rapidapi import RapidAPIContext, authenticate, rate_limit_headers, require_rapidapi

__all__ = [
    'create_app',
    'ApiError',
    'RapidAPIContext',
    'authenticate',
    'rate_limit_headers',
    'require_rapidapi',
]
