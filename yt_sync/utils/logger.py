"""
Logging configuration and utilities for yt-sync
Provides colored console output and file logging with separation between user and technical messages
"""

import logging
import logging.handlers
import re
import sys
import time
from pathlib import Path
from typing import Optional, TYPE_CHECKING
import colorama
from colorama import Fore, Back, Style
from tqdm import tqdm

if TYPE_CHECKING:
    from ..config.settings import Settings


# Initialize colorama for Windows compatibility
colorama.init()

# Third-party loggers that would otherwise flood the console
EXTERNAL_LIBS = ['yt_dlp', 'urllib3', 'requests', 'websockets']


class ConsoleMessageFilter(logging.Filter):
    """Filter to allow only user-facing messages to console"""

    def filter(self, record):
        # Allow all WARNING+ messages
        if record.levelno >= logging.WARNING:
            return True

        # Allow messages explicitly marked for console
        if getattr(record, 'console_output', False):
            return True

        # Allow messages from specific console loggers
        if record.name.endswith('.console') or record.name.endswith('.user'):
            return True

        # Block everything else (DEBUG/INFO technical messages)
        return False


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored output for console"""

    # Color mapping for log levels
    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize colored formatter

        Args:
            fmt: Log format string
            use_colors: Whether to use colored output
        """
        super().__init__()
        self.use_colors = use_colors
        self.fmt = fmt or '%(message)s'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors"""
        formatter = logging.Formatter(self.fmt)

        if self.use_colors and record.levelname in self.COLORS:
            # Create a copy of the record to avoid modifying the original
            record_copy = logging.makeLogRecord(record.__dict__)
            record_copy.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{Style.RESET_ALL}"

            message = formatter.format(record_copy)
            # Warnings and errors are tinted as a whole so they stand out next to the progress bar
            if record.levelno >= logging.WARNING:
                message = f"{self.COLORS[record.levelname]}{message}{Style.RESET_ALL}"
            return message

        return formatter.format(record)


class ProgressHandler(logging.Handler):
    """Custom handler that doesn't interfere with progress bars"""

    def __init__(self, stream=None):
        """Initialize progress-friendly handler"""
        super().__init__()
        self.stream = stream or sys.stdout

    def emit(self, record: logging.LogRecord) -> None:
        """Emit log record above any active tqdm bar"""
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    colored_output: bool = True,
    max_size: str = "10MB",
    backup_count: int = 3
) -> None:
    """
    Setup application logging configuration with separated console/file output

    Args:
        level: Logging level for the file handler (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (None to disable file logging)
        console_output: Enable console logging
        colored_output: Enable colored console output
        max_size: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, filter at handler level

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    # Console handler - only user-facing messages (WARNING+ or explicitly marked)
    if console_output:
        console_handler = ProgressHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)  # Let filter decide what to show
        # At DEBUG level the console shows technical messages too
        if numeric_level > logging.DEBUG:
            console_handler.addFilter(ConsoleMessageFilter())
        console_handler.setFormatter(ColoredFormatter(
            fmt='%(message)s',
            use_colors=colored_output
        ))
        root_logger.addHandler(console_handler)

    # File handler with full detail logging
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=parse_size(max_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s | %(name)-30s | %(levelname)-8s | %(funcName)-20s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # yt-dlp output is captured per call; keep library loggers off the console
    for lib in EXTERNAL_LIBS:
        lib_logger = logging.getLogger(lib)
        lib_logger.setLevel(logging.CRITICAL)
        lib_logger.propagate = False

    # Log startup message (to file only)
    logging.getLogger('yt-sync').info(
        f"Logging initialized - Level: {level}, Console: {console_output}, File: {log_file}"
    )


def get_current_log_file() -> Optional[Path]:
    """
    Get the current log file path from active file handlers

    Returns:
        Path to current log file or None if no file logging
    """
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return Path(handler.baseFilename)
    return None


def parse_size(size_str: str) -> int:
    """
    Parse size string to bytes

    Args:
        size_str: Size string like "10MB", "1GB", "500KB"

    Returns:
        Size in bytes

    Raises:
        ValueError: If the string is not a valid size
    """
    size_str = size_str.upper().strip()

    multipliers = {
        'B': 1,
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'TB': 1024 ** 4,
    }

    match = re.match(r'^(\d+(?:\.\d+)?)\s*([KMGT]?B)$', size_str)
    if not match:
        raise ValueError(f"Invalid size format: {size_str}")

    number, unit = match.groups()
    return int(float(number) * multipliers[unit])


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a module

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance with console_info/console_warning/console_error helpers
    """
    logger = logging.getLogger(name)

    def console_info(message: str):
        """Log message that should appear on console for user"""
        logger.info(message, extra={'console_output': True})

    def console_warning(message: str):
        """Log warning that should appear on console"""
        logger.warning(message)

    def console_error(message: str):
        """Log error that should appear on console"""
        logger.error(message)

    logger.console_info = console_info
    logger.console_warning = console_warning
    logger.console_error = console_error

    return logger


def configure_from_settings(settings: "Settings", verbose: bool = False) -> None:
    """
    Configure logging from application settings

    Args:
        settings: Loaded settings instance
        verbose: Force DEBUG level regardless of the configured level
    """
    log_file_path = None
    if settings.logging.file:
        if Path(settings.logging.file).expanduser().is_absolute():
            log_file_path = Path(settings.logging.file).expanduser()
        else:
            log_file_path = settings.get_config_directory() / settings.logging.file

    setup_logging(
        level="DEBUG" if verbose else settings.logging.level,
        log_file=str(log_file_path) if log_file_path else None,
        console_output=settings.logging.console_output,
        colored_output=settings.logging.colored_output,
        max_size=settings.logging.max_size,
        backup_count=settings.logging.backup_count
    )


class OperationLogger:
    """Logger for tracking a long-running operation with a tqdm progress bar"""

    def __init__(self, logger: logging.Logger, operation_name: str, show_progress: bool = True):
        """
        Initialize operation logger

        Args:
            logger: Base logger instance (from get_logger)
            operation_name: Name of the operation
            show_progress: Whether to draw a progress bar on the console
        """
        self.logger = logger
        self.operation_name = operation_name
        self.show_progress = show_progress
        self.start_time: Optional[float] = None
        self.progress_bar: Optional[tqdm] = None

    def start(self, message: Optional[str] = None) -> None:
        """Start tracking operation - show to user"""
        self.start_time = time.time()
        self.logger.console_info(message or f"Starting {self.operation_name}")
        self.logger.debug(f"Operation started: {self.operation_name}")

    def progress(self, message: str, current: int, total: int) -> None:
        """Log progress and advance the progress bar to current/total"""
        self.logger.debug(f"{self.operation_name}: {message} ({current}/{total})")

        if not self.show_progress or total <= 0:
            return

        if self.progress_bar is None:
            self.progress_bar = tqdm(
                total=total,
                desc="Syncing",
                bar_format="{desc} {n}/{total} {bar} {percentage:3.0f}%",
                ncols=100,
                colour='cyan',
                ascii=False,
                file=sys.stdout
            )

        self.progress_bar.n = current
        self.progress_bar.refresh()

    def _close_bar(self) -> None:
        if self.progress_bar is not None:
            self.progress_bar.close()
            self.progress_bar = None

    def complete(self, message: Optional[str] = None) -> None:
        """Mark operation as complete - close progress bar"""
        self._close_bar()

        self.logger.console_info(message or f"{self.operation_name} completed")
        if self.start_time is not None:
            duration = time.time() - self.start_time
            self.logger.debug(f"Operation completed: {self.operation_name} in {duration:.2f}s")
        else:
            self.logger.debug(f"Operation completed: {self.operation_name}")

    def error(self, message: str, exception: Optional[Exception] = None) -> None:
        """Log operation error - close progress bar first"""
        self._close_bar()

        self.logger.error(f"{self.operation_name} failed: {message}")
        if exception is not None:
            self.logger.debug(f"Operation failed: {self.operation_name}", exc_info=exception)


def create_operation_logger(name: str, operation: str, show_progress: bool = True) -> OperationLogger:
    """
    Create operation logger for tracking long-running tasks

    Args:
        name: Logger name
        operation: Operation description
        show_progress: Whether to draw a progress bar

    Returns:
        OperationLogger instance
    """
    return OperationLogger(get_logger(name), operation, show_progress)
