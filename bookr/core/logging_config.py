import logging
from typing import Optional

from bookr.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn's access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
