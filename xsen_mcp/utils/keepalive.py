"""Self health-check ping that keeps idle hosting platforms from sleeping the process."""

import httpx

from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)

KEEPALIVE_TIMEOUT = 5.0


async def ping(url: str, transport: httpx.AsyncBaseTransport | None = None) -> bool:
    """
    Requests `url` once and logs the outcome.

    Returns:
        True when the endpoint answered with a 2xx status.
    """
    try:
        async with httpx.AsyncClient(timeout=KEEPALIVE_TIMEOUT, transport=transport) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        logger.warning("keepalive_ping_failed", url=url, error=str(e))
        return False

    if response.is_success:
        logger.info("keepalive_ping", url=url, status_code=response.status_code)
        return True
    logger.warning("keepalive_ping_failed", url=url, status_code=response.status_code)
    return False
