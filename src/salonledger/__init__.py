"""Salon finance ledger: settlement of service takings between masters and salon."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FILE_ENV = "SALONLEDGER_LOG_FILE"


def _configure_logging() -> logging.Logger:
    """Configure package-wide logging with console and optional file handlers."""

    logger = logging.getLogger(__name__)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (OSError, PermissionError) as exc:
            print(
                f"Warning: unable to initialize log file at '{log_file}': {exc}",
                file=sys.stderr,
            )

    return logger


def set_console_level(level: int) -> None:
    """Change the threshold of the console handler (used by ``--verbose``)."""
    for handler in log.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)


log = _configure_logging()


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from salonledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
