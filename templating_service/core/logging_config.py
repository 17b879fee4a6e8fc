"""Logging setup for command line entry points."""

import logging


LOG_FORMAT = "%(asctime)s,p%(process)s,{%(filename)s:%(lineno)d},%(levelname)s,%(message)s"


def configure_logging(
    level: str = "INFO",
) -> None:
    """Configure root logging with the service log format."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
    )
    # Motor/pymongo are chatty at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
