"""
Security dependencies for the API.
"""

import logging

from fastapi import HTTPException, Request, status

logger = logging.getLogger(__name__)


async def verify_api_token(request: Request):
    """
    Verify the API token from the configured header (X-API-Key by default).

    When no token is configured the check is bypassed.
    """
    settings = request.app.state.settings

    if not settings.api_token:
        if settings.is_production:
            logger.warning("API token not configured in production mode!")
        return None

    client_host = request.client.host if request.client else "unknown"
    api_key = request.headers.get(settings.api_token_header)

    if not api_key:
        logger.warning(f"Missing API key from {client_host}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing API key. Provide {settings.api_token_header} header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if api_key != settings.api_token:
        logger.warning(f"Invalid API key attempt from {client_host}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key
