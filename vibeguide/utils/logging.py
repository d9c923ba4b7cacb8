"""Logging setup for vibeguide.

Modules use the standard pattern::

    import logging
    logger = logging.getLogger(__name__)

The CLI configures a stderr handler; the TUI writes to a rotating file
instead so log lines never draw over the screen.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger that writes to stderr, configuring it on first use."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(handler)
        logger.setLevel(level)

    return logger


def setup_tui_logging(verbose: bool = False, log_file: Optional[Path] = None) -> Path:
    """Send vibeguide logs to a rotating file while the TUI owns the terminal.

    The root logger stays at WARNING to keep third-party libraries quiet;
    ``vibeguide.*`` loggers log at INFO, or DEBUG when ``verbose``.

    Returns:
        Path of the log file.
    """
    # Inline path avoids importing config before logging is ready
    if log_file is None:
        log_file = Path.home() / ".config" / "vibeguide" / "vibeguide.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        handler = RotatingFileHandler(log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logging.getLogger("vibeguide").setLevel(logging.DEBUG if verbose else logging.INFO)
    return log_file
