"""CORS and per-client rate limits for the games API"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from stumblelele import config

logger = logging.getLogger(__name__)

# Keyed by client address; per-route limits come from config.RATE_LIMIT_*
limiter = Limiter(key_func=get_remote_address, enabled=config.RATE_LIMIT_ENABLED)

RECORD_LIMIT = config.RATE_LIMIT_RECORD
READ_LIMIT = config.RATE_LIMIT_READ
HEALTH_LIMIT = config.RATE_LIMIT_HEALTH


def setup_middleware(app: FastAPI) -> None:
    """
    Attach CORS and the rate limiter to the app

    The web client only reads and posts JSON, so CORS is limited to GET,
    POST and the Authorization/Content-Type headers.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    logger.info(
        f"Middleware configured: origins={config.CORS_ORIGINS}, "
        f"limits record={RECORD_LIMIT} read={READ_LIMIT} health={HEALTH_LIMIT}, "
        f"rate limiting {'on' if limiter.enabled else 'off'}"
    )
