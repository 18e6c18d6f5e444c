"""Startup script for container deployments."""
import logging

import uvicorn

from dashboard import config
from dashboard.core.logging import configure_logging

if __name__ == "__main__":
    configure_logging()
    logging.getLogger(__name__).info("Starting uvicorn on port %s", config.PORT)
    uvicorn.run(
        "dashboard.app:app",
        host=config.HOST,
        port=config.PORT,
        log_level="info",
    )
