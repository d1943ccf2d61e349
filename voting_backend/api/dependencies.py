import hmac
from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException

from voting_backend.config import Config, get_config
from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.hiro import StacksNodeApi

# Configure logger
logger = configure_logger(__name__)


def authorize(header_value: Optional[str], secret: str) -> bool:
    """
    Check an Authorization header against the configured webhook secret.

    The secret may be configured with or without the "Bearer " prefix. The
    header must carry it with the prefix.

    Args:
        header_value: The Authorization header value, if any
        secret: The configured webhook secret

    Returns:
        bool: True when the header matches the secret
    """
    if not header_value or not secret:
        return False
    expected = secret if secret.startswith("Bearer ") else f"Bearer {secret}"
    return hmac.compare_digest(header_value.encode(), expected.encode())


async def verify_webhook_auth(
    authorization: Optional[str] = Header(None),
    settings: Config = Depends(get_config),
) -> None:
    """
    Verify webhook authentication using Bearer token.

    Every failure is reported the same way so the response does not reveal
    which part of the header was wrong.

    Args:
        authorization: The Authorization header value
        settings: Application configuration

    Raises:
        HTTPException: If authentication fails
    """
    if not authorization:
        logger.error("Missing Authorization header for webhook")
        raise HTTPException(status_code=401, detail="Unauthorized")

    if not authorize(authorization, settings.api.webhook_auth):
        logger.error("Invalid webhook authentication token")
        raise HTTPException(status_code=401, detail="Unauthorized")


async def get_node_api(
    settings: Config = Depends(get_config),
) -> AsyncIterator[StacksNodeApi]:
    """Provide a node client for the duration of one request."""
    async with StacksNodeApi.from_config(settings) as node_api:
        yield node_api
