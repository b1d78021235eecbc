#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
sync_logging.py
===============================================================================
Central logging helper for the pro-feature CSV → Strapi sync.

- Sets up a single file-based logger per run under:
      ./logs/pro-feature-sync-<UTC timestamp>.log

- Intended to be called ONCE at program startup (from pro_feature_sync.py),
  and torn down with shutdown_logging() when the run ends.

Other modules (feature_sync.processing, feature_sync.clients.strapi, etc.)
just use the standard Python logging API:

    import logging
    logger = logging.getLogger(__name__)
    logger.info("something...")

No module should call logging.basicConfig; this module owns that.
===============================================================================
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"

_installed: List[logging.Handler] = []


class IsoFormatter(logging.Formatter):
    """Formatter that renders asctime as an ISO-8601 UTC timestamp."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def run_stamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp safe for file names, e.g. 2025-01-31T10-15-00-123Z."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-").replace(".", "-")


def setup_logging(
    level: int = logging.DEBUG,
    log_root: Optional[str] = None,
    console_level: int = logging.INFO,
) -> str:
    """
    Configure global logging, *replacing* any existing handlers.

    Returns:
        The path to the log file being used.
    """
    root_logger = logging.getLogger()

    # Always take over: remove any existing handlers that might have been
    # created by early logging calls (e.g., in imported modules).
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
    _installed.clear()

    if not log_root:
        log_root = os.path.join(os.getcwd(), "logs")

    os.makedirs(log_root, exist_ok=True)

    log_file = os.path.join(log_root, f"pro-feature-sync-{run_stamp()}.log")

    formatter = IsoFormatter(LOG_FORMAT)

    # File handler: append-only, capture everything
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    # Console: progress on stdout, warnings and errors on stderr
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(console_level)
    stdout_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(max(console_level, logging.WARNING))
    stderr_handler.setFormatter(formatter)

    root_logger.setLevel(min(level, console_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)
    _installed.extend([file_handler, stdout_handler, stderr_handler])

    # urllib3 chatter would drown out the per-request lines we log ourselves.
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    root_logger.debug("Logging initialized. Log file: %s", log_file)
    return log_file


def shutdown_logging() -> None:
    """Flush and detach the handlers installed by setup_logging()."""
    root_logger = logging.getLogger()
    for h in _installed:
        h.flush()
        root_logger.removeHandler(h)
        h.close()
    _installed.clear()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Convenience wrapper to get a logger for a module.
    """
    return logging.getLogger(name if name is not None else __name__)
