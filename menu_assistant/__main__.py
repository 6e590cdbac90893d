from __future__ import annotations

import logging
import sys

import uvicorn

from .app import create_app
from .config import load_settings
from .errors import MenuAssistantError

logger = logging.getLogger("menu_assistant")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main() -> None:
    try:
        settings = load_settings()
    except MenuAssistantError as exc:
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)

    try:
        app = create_app(settings)
    except MenuAssistantError as exc:
        logger.critical("Could not build application: %s", exc)
        sys.exit(1)

    # lifespan="on" makes a failed store ping abort startup
    uvicorn.run(app, host="0.0.0.0", port=settings.port, lifespan="on")


if __name__ == "__main__":
    main()
