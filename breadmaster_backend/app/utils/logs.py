# breadmaster_backend/app/utils/logs.py
from __future__ import annotations

import logging

from breadmaster_backend.app.config import log_level

def get_logger(name: str) -> logging.Logger:
    """Named app logger with a stream handler attached once."""
    log = logging.getLogger(f"breadmaster.{name}")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
        log.setLevel(log_level())
    return log
