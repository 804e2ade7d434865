"""
Main entry point for the Kanji Browser application.

This module sets up logging and starts the browser window, which is
built from separate components for configuration, dictionary access,
page assembly, navigation history and UI.
"""

import logging

from config import get_logging_config

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure the root logger from the application configuration."""
    logging.basicConfig(**get_logging_config())


def main():
    """Main entry point for the application."""
    setup_logging()
    from browser_app import KanjiBrowserApp

    try:
        app = KanjiBrowserApp()
        logger.info("Kanji Browser started")
        app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception:
        logger.exception("Application error")
        raise


if __name__ == '__main__':
    main()
