"""
Logging configuration.

Imported for its side effect by app.main so that every module-level
``logging.getLogger(__name__)`` shares the same handler and format.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT,
    stream=sys.stdout,
)

# httpx logs every request at INFO, which drowns out our own messages
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger("app")
