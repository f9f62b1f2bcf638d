"""
Image Text Translator - Main Entry Point

A small web service that:
- Accepts an uploaded or captured image
- Extracts its text with Tesseract OCR
- Translates the text through a chain of translation APIs, falling back
  to the next provider when one fails
"""

import asyncio
import signal
import sys

from image_translator.api.server import start_server, stop_server
from image_translator.config import config
from image_translator.utils.logger import get_logger, setup_logging

# Initialize logging
setup_logging(config.LOG_LEVEL, config.ENVIRONMENT)
logger = get_logger(__name__)


async def main():
    """
    Main entry point for the service.

    Initialization sequence:
    1. Start the HTTP server (page, JSON API, health check)
    2. Run until interrupted
    """
    logger.info("Starting Image Text Translator",
                environment=config.ENVIRONMENT,
                host=config.API_HOST,
                port=config.API_PORT,
                ocr_languages=config.OCR_LANGUAGES)

    try:
        await start_server(config)
        logger.info("Service started successfully. Waiting for requests...")

        # Serve until cancelled
        await asyncio.Event().wait()

    except asyncio.CancelledError:
        logger.info("Shutdown requested")
    except Exception as e:
        logger.error("Fatal error", error=str(e), exc_info=True)
        raise
    finally:
        logger.info("Shutting down...")
        await stop_server()
        logger.info("Shutdown complete")


def handle_shutdown(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info("Received shutdown signal", signal=signum)
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    signal.signal(signal.SIGTERM, handle_shutdown)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")


if __name__ == "__main__":
    run()
