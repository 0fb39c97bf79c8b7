"""
Logging setup shared by the FastAPI host and the standalone cleanup worker.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# AWS SDK loggers emit per-request detail at INFO and below.
_NOISY_LOGGERS = ("boto3", "botocore", "urllib3")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_logging"]
