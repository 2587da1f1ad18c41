# === FILE: site_warmer/logger.py ===
"""site_warmer.logger: the ``SiteWarmer`` logger every module writes to.

Modules either import :data:`logger` or call
``logging.getLogger("SiteWarmer")``. Until :func:`configure` is called again
(the CLI does so once, from ``--log-level`` / ``--log-file`` /
``--log-format``) records go to stdout at INFO, e.g.::

    2024-05-01 12:00:00,000 | INFO     | SiteWarmer | response time: 12 ms for requesting https://example.com/a
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteWarmer"

#: ``--log-file`` rotates at 5 MiB and keeps three backups
MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUPS: Final[int] = 3


def _handlers(log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
            )
        )
    return handlers


def configure(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Point the SiteWarmer logger at stdout and, optionally, a rotating *log_file*.

    Handlers installed by an earlier call are closed and replaced, so calling
    this again never leaves a log file open. *level* accepts a number or a
    level name in any case.
    """
    lg = logging.getLogger(LOGGER_NAME)
    for old in list(lg.handlers):
        lg.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.setLevel(level.upper() if isinstance(level, str) else level)
    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "configure", "logger"]
