import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional


LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "..", "..", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.path.join(LOG_DIR, "aligner.log")


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors and emojis for better log readability"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    EMOJIS = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️',
        'WARNING': '⚠️',
        'ERROR': '❌',
        'CRITICAL': '🚨'
    }

    def format(self, record):
        emoji = self.EMOJIS.get(record.levelname, '')
        color = self.COLORS.get(record.levelname, '')
        reset = self.COLORS['RESET']
        # Work on a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{emoji} {record.levelname}{reset}"
        return super().format(record)


def setup_logging(verbose: bool = False) -> None:
    """Console logging with visual indicators"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter("%(levelname)s %(name)s: %(message)s"))

    root_logger.setLevel(logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.INFO))
    root_logger.addHandler(console_handler)

    # Per-candidate search chatter stays at INFO unless explicitly asked for
    if not verbose:
        logging.getLogger("paraphrase_aligner.alignment.greek_aligner").setLevel(logging.INFO)
        logging.getLogger("paraphrase_aligner.alignment.driver").setLevel(logging.INFO)


def init_logging(log_dir: Optional[str] = None) -> str:
    """Add the rotating file handler; returns the log file path"""
    directory = log_dir or LOG_DIR
    os.makedirs(directory, exist_ok=True)
    log_file = os.path.join(directory, os.path.basename(LOG_FILE))

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = logging.getLogger()
    if root.level == logging.NOTSET:
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
    return log_file
