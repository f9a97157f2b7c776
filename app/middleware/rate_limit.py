"""
Rate limiting middleware for DiamondQuiz
"""

import logging

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.core.config import settings

logger = logging.getLogger(__name__)


def default_limit() -> str:
    return f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_PERIOD} seconds"


def add_rate_limiting(app: FastAPI) -> Limiter:
    """Apply the default per-client limit to every route"""
    limiter = Limiter(key_func=get_remote_address, default_limits=[default_limit()])

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    logger.info("Rate limiting enabled: %s", default_limit())
    return limiter
