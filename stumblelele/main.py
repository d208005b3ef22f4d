"""Main entry point for the StumbleLele games API"""
import logging
import os

import uvicorn

from stumblelele.api.server import create_api_application

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the API server"""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8080"))

    app = create_api_application()
    logger.info(f"Serving StumbleLele games API on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
