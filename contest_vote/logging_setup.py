"""logging initialisation, called once from the application lifespan."""

from __future__ import annotations

import logging


def setup_logging(level: str = "INFO") -> None:
    # already configured: do not add a second handler
    if getattr(setup_logging, "_configured", False):
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(fmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # noisy libs
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("gspread").setLevel(logging.WARNING)

    setup_logging._configured = True  # type: ignore[attr-defined]
