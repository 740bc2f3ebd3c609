# /app/core/logging_config.py

import logging
import sys

from . import config

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_tracker_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tracker_handler = True
        root.addHandler(handler)

    # SQL echo is controlled separately; keep the engine quiet by default.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
