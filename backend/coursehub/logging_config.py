# coursehub/logging_config.py
import logging
import sys

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False

def setup_logging(level: str = None) -> None:
    """Configure the root logger once for the whole process"""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # SQL echo is noisy outside debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
