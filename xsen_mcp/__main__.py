"""Entry point for running the XSEN video MCP server."""

import uvicorn

from xsen_mcp.config import get_config
from xsen_mcp.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Entry point for running the server."""
    config = get_config()
    configure_logging(config.log_level)

    logger.info("Starting server", host=config.server_host, port=config.port)

    uvicorn.run(
        "xsen_mcp.server:create_app",
        factory=True,
        host=config.server_host,
        port=config.port,
        log_config=None,  # Use our custom structlog configuration
        access_log=False,
    )


if __name__ == "__main__":
    main()
