# cms_delivery/logging_setup.py
"""Logging bootstrap shared by applications embedding cms_delivery."""

import logging
from typing import Optional

from cms_delivery.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with the standard cms_delivery format."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format=LOG_FORMAT,
    )
