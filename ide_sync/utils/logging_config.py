import logging
import sys
import os
from datetime import datetime

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that must propagate to the root handlers even when uvicorn
# installed its own configuration first
SERVICE_LOGGERS = ("ide_sync", "main", "uvicorn", "uvicorn.error", "uvicorn.access")


class ColoredFormatter(logging.Formatter):
    """Colours the level name only, so paths in messages stay copy-pasteable."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    reset = "\x1b[0m"

    def __init__(self, fmt=LOG_FORMAT, datefmt=DATE_FORMAT, use_color=True):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_color else None
        if color is None:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{self.reset}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(level=logging.INFO, log_dir="logs"):
    """
    Setup centralized logging configuration.

    Console output always goes to stderr, coloured only when stderr is a
    terminal. A dated file under ``log_dir`` is added unless ``log_dir`` is
    empty, which keeps IDE-embedded runs from writing into the workspace.
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=sys.stderr.isatty()))
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"ide_sync_{datetime.now().strftime('%Y%m%d')}.log")
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for logger_name in SERVICE_LOGGERS:
        named = logging.getLogger(logger_name)
        named.setLevel(level)
        named.propagate = True

    root_logger.info(
        "Logging initialized (console%s).", " + file" if log_dir else " only"
    )
