#!/usr/bin/env python
"""Start the sync process: liveness endpoint plus the scheduled sync jobs."""
import logging

import uvicorn

from marketsync.core.config import get_settings
from marketsync.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info(f"Server running on port {settings.PORT}")

    uvicorn.run(
        "marketsync.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
