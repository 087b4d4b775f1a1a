import logging
import os
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Colors the level name; the rest of the line is left plain."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }
    RESET = "\x1b[0m"

    def __init__(self, use_color=True):
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_color = use_color

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_color else None
        if not color:
            return super().format(record)
        # Work on a copy; other handlers see the same record
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        return super().format(record)


def _wants_color():
    # GitHub Actions renders ANSI codes even though stderr is not a tty
    return sys.stderr.isatty() or os.getenv("GITHUB_ACTIONS") == "true"


def setup_logging(level=logging.INFO):
    """Send all canceller logs to stderr with the colored formatter."""
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=_wants_color()))
    root_logger.addHandler(console_handler)

    for logger_name in ["run_canceller", "main"]:
        l = logging.getLogger(logger_name)
        l.setLevel(level)
        l.propagate = True

    # httpx logs every request at INFO; keep it for debugging only
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
