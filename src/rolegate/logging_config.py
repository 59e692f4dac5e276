"""Logging setup."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format=LOG_FORMAT,
    )
