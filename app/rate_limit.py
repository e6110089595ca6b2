"""Shared rate limiter, keyed by client IP with in-memory storage.

Limits are per worker process; there is no shared backend.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)
