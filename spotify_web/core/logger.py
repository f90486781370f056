"""
Logging configuration for spotify-web.

The library itself only obtains loggers through get_logger(); applications
(and the bundled CLI) call setup_logging() once at startup to route records to:
    - Console: compact, colored by level (colorama)
    - Optional log file: every record from DEBUG up, with timestamps

Library modules never log secrets, tokens or authorization codes.

Usage:
    from spotify_web.core.logger import setup_logging, get_logger

    setup_logging("DEBUG", log_file=Path("spotify-web.log"))
    logger = get_logger(__name__)
    logger.info("Requesting access token")
"""

import logging
import sys
from pathlib import Path

import colorama
from colorama import Fore, Style


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

# Third-party loggers that are too chatty at DEBUG
NOISY_LOGGERS = ("urllib3", "requests")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name of console output.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(CONSOLE_LOG_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record, coloring the level name when enabled.

        The record itself is not modified so other handlers still see the
        plain level name.
        """
        if not self.use_colors:
            return super().format(record)

        color = self.LEVEL_COLORS.get(record.levelno, "")
        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record_copy)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    colored: bool = True,
) -> None:
    """
    Configure the logging system for an application using the library.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file receiving every record at DEBUG and above.
                  Parent directories are created. The file is overwritten.
        colored: Whether console level names are colored.

    Behavior:
        1. Configure root logger level to DEBUG and drop existing handlers
        2. Add a console handler on stderr at the requested level
        3. Add the file handler if log_file is given
        4. Raise noisy third-party loggers to WARNING

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before starting any worker threads.
    """
    if colored:
        colorama.just_fix_windows_console()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'spotify_web.authorization.flows'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush, close and remove every handler of the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.flush()
        handler.close()
        root_logger.removeHandler(handler)
