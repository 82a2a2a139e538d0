#!/usr/bin/env python3
"""
Bank Ledger Entry Point

Starts the FastAPI server with a freshly seeded in-memory ledger.
"""

import sys

import uvicorn

from bank_ledger.api import create_app
from bank_ledger.config import get_config
from bank_ledger.logging_config import setup_logging


def main():
    config = get_config()
    logger = setup_logging(config.log_level, config.log_format)

    app = create_app(config=config)
    logger.info("Starting Bank Ledger API on %s:%d", config.api_host, config.api_port)

    uvicorn.run(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nShutting down Bank Ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
