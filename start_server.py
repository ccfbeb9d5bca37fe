#!/usr/bin/env python3
"""
Startup script for the Task Tracker API
"""

import logging
import os

import uvicorn
from dotenv import load_dotenv

logger = logging.getLogger("start_server")


def main():
    load_dotenv()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    logging.basicConfig(level=log_level.upper())
    logger.info("Starting Task Tracker API on %s:%s (reload=%s)", host, port, reload)

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
