"""Process-wide logging setup for the API and CLI entry points."""

import logging
from typing import Optional

from albumcat.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once. An explicit level overrides settings."""
    resolved = str(level or settings.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
    )
