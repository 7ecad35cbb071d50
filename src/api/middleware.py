"""API middleware for rate limiting, compression and CORS."""

import logging

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from core.config import AppConfig

logger = logging.getLogger(__name__)

GZIP_MIN_SIZE = 1000


def create_limiter(app_config: AppConfig) -> Limiter:
    """Per-client limiter using the configured default limit."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[app_config.http_config.rate_limit_default]
    )


def setup_rate_limiting(app: FastAPI, limiter: Limiter):
    """Configure rate limiting for FastAPI application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


def setup_middleware(app: FastAPI, app_config: AppConfig):
    """Configure all middleware for FastAPI application.

    Sets up CORS, GZip compression, and rate limiting.
    """
    allowed_origins = app_config.http_config.resolve_allowed_origins()
    if not allowed_origins:
        logger.warning("Production environment: CORS_ALLOWED_ORIGINS not set, CORS disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=app_config.http_config.cors_preflight_max_age,
    )

    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)

    setup_rate_limiting(app, create_limiter(app_config))
