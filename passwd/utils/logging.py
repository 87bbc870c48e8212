# passwd/utils/logging.py
import logging
from typing import Optional

from passwd.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("passwd")
logger.addHandler(logging.NullHandler())

_stream_handler: Optional[logging.Handler] = None

def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the passwd logger. Libraries stay silent by
    default; hosts that want passwd's output call this once at startup.
    """
    global _stream_handler
    level = (level or settings.LOG_LEVEL).upper()
    if _stream_handler is None:
        _stream_handler = logging.StreamHandler()
        _stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _stream_handler not in logger.handlers:
        logger.addHandler(_stream_handler)
    logger.setLevel(level)
    return logger
