# blog/core/limiter.py
"""
Request rate limiting for the unauthenticated auth endpoints.
Limits are counted per client address; exceeding one raises
slowapi's RateLimitExceeded, rendered as 429 by the error translator.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from blog.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)
