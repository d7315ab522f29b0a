"""
Process-wide logging for the PetCare API and CLI.

One pipe-separated line per record on stdout. Records name entities by
id only; owner contact details stay out of the logs.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers kept at WARNING whatever the configured level.
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error", "sqlalchemy.engine", "slowapi")


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler, replacing any previous configuration.

    Unknown level names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
