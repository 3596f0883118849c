import logging
import sys
from typing import Optional

from testgen.core.config import get_settings


PACKAGE_LOGGER = "testgen"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def configure_logging(level_override: Optional[str] = None) -> None:
    """
    Configure logging for the service and the generation pipeline.

    Idempotent. With ``debug`` enabled in settings the package logger drops
    to DEBUG regardless of the root level, so per-case generation details
    show up without flooding the output with third-party debug records.
    """
    global _configured

    if _configured:
        return

    settings = get_settings()
    log_level = (level_override or settings.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = "INFO"

    logging.basicConfig(level=log_level, format=LOG_FORMAT, stream=sys.stdout)

    if settings.debug:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    for noisy_logger in ("uvicorn", "uvicorn.access", "httpx"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    _configured = True
