import logging
import sys
from typing import Optional

from writing_assistant.core.config import get_settings


_configured = False


def configure_logging(level_override: Optional[str] = None) -> None:
    """
    Configure structured logging for the service.

    This is idempotent and safe to call multiple times.
    """
    global _configured

    if _configured:
        return

    settings = get_settings()
    log_level = (level_override or settings.log_level).upper()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )

    # httpx logs full request URLs, and the Google key travels in the query string.
    for noisy_logger in ("uvicorn", "uvicorn.access", "httpx", "openai"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    _configured = True
