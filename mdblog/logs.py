from __future__ import annotations

from datetime import date
import logging
import sys
from pathlib import Path

from mdblog.paths import LOGS_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def access_log_path(logs_dir: Path = LOGS_DIR, day: date | None = None) -> Path:
    """Daily log file, e.g. cache/logs/access-20240131.log."""
    day = day or date.today()
    return logs_dir / f"access-{day:%Y%m%d}.log"


class DailyFileHandler(logging.FileHandler):
    """File handler that switches to a new access-YYYYMMDD.log each day."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = Path(logs_dir)
        self.day = date.today()
        super().__init__(access_log_path(self.logs_dir, self.day), encoding="utf-8")

    def emit(self, record: logging.LogRecord):
        today = date.today()
        if today != self.day:
            self.acquire()
            try:
                if today != self.day:
                    self.day = today
                    if self.stream:
                        self.stream.close()
                        self.stream = None
                    self.baseFilename = str(
                        access_log_path(self.logs_dir, today).resolve()
                    )
            finally:
                self.release()
        super().emit(record)


def setup_logging(prod: bool, logs_dir: Path = LOGS_DIR) -> Path:
    """Route logs to the daily file; outside prod also log debug to stderr."""
    logs_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler = DailyFileHandler(logs_dir)
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(file_handler)

    if prod:
        root.setLevel(logging.INFO)
    else:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root.addHandler(console)
        root.setLevel(logging.DEBUG)
        root.debug('Log level set to "debug"')

    log_file = Path(file_handler.baseFilename)
    root.debug("Using <%s> to log requests", log_file)
    return log_file
