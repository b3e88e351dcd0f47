# gateway/main.py
import sys
import logging

import uvicorn

from gateway.api import create_app
from gateway.config import load_settings
from gateway.errors import ConfigurationError

logger = logging.getLogger(__name__)


def main():
    """Load settings, refuse to start without credentials, then serve."""
    logging.basicConfig(level=logging.INFO)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical(f"FATAL ERROR: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    app = create_app(settings)
    logger.info(f"Messaging gateway listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
