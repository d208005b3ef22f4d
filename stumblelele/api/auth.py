"""Bearer API-key check for the games API"""
import logging
import secrets
from fastapi import HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from stumblelele import config

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()


def is_valid_api_key(api_key: str) -> bool:
    """Constant-time comparison against every configured key"""
    return any(secrets.compare_digest(api_key, key) for key in config.API_KEYS)


async def verify_api_key(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme)
) -> str:
    """
    FastAPI dependency guarding every /api/v1 route

    Raises:
        HTTPException: 503 when API_KEYS is empty, 401 for an unknown key
    """
    if not config.API_KEYS:
        logger.error("API_KEYS is empty - games API is refusing all requests")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="API authentication not configured"
        )

    if not is_valid_api_key(credentials.credentials):
        logger.warning("Rejected request with unknown API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key"
        )

    return credentials.credentials
