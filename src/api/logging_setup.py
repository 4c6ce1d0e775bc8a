from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 5


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging for the service.

    The first call installs a stdout handler (and a rotating file handler when
    log_file is given). Later calls only adjust the level of those handlers.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    if getattr(root_logger, "_todo_api_logging_configured", False):
        root_logger.setLevel(log_level)
        for handler in root_logger.handlers:
            if getattr(handler, "_todo_api_handler", False):
                handler.setLevel(log_level)
        return

    formatter = logging.Formatter(_FORMAT)

    handlers = []
    stream_handler = logging.StreamHandler(sys.stdout)
    handlers.append(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
        )

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler._todo_api_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(log_level)
    root_logger._todo_api_logging_configured = True  # type: ignore[attr-defined]
