"""
Centralized logging configuration for the AutoDispose helpers.

Uses rotating file handler with logs stored in logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional


_VERBOSE: bool = False
# Base directory for logs. Defaults to the project root; setup_logging()
# may point it elsewhere (tests, embedding applications).
_BASE_DIR: Path = Path(__file__).parent.parent.parent
_INSTALLED_HANDLERS: List[logging.Handler] = []

_LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    DISPOSE_COLOR = '\033[38;5;135m'   # Purple for disposal summaries
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def _color_for(self, record):
        # Summaries stand out unless they carry a warning or worse.
        if record.levelno < logging.WARNING and 'Dispose summary' in str(record.msg):
            return self.DISPOSE_COLOR
        return self.COLORS.get(record.levelname)

    def format(self, record):
        original_levelname = record.levelname
        color = self._color_for(record)
        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


def get_log_dir() -> Path:
    """Return the directory used for log files."""

    return _BASE_DIR / "logs"


def _teardown_handlers() -> None:
    """Remove and close every handler installed by setup_logging().

    Safe to call repeatedly; handlers added by other code are left alone.
    """
    root_logger = logging.getLogger()
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        root_logger.removeHandler(handler)
        try:
            handler.close()
        except Exception:
            pass


def setup_logging(
    debug: bool = False,
    verbose: bool = False,
    base_dir: Optional[Path] = None,
) -> None:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, enables additional high-volume debug logs
            (per-entry resolution lines). Verbose mode also implies
            debug-level logging.
        base_dir: Optional directory whose ``logs/`` subfolder receives the
            log file. Defaults to the project root.
    """
    global _VERBOSE, _BASE_DIR

    debug_enabled = debug or verbose
    if base_dir is not None:
        _BASE_DIR = Path(base_dir)

    # Calling setup twice must not stack handlers.
    _teardown_handlers()

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "autodispose.log"

    level = logging.DEBUG if debug_enabled else logging.INFO

    formatter = logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    _INSTALLED_HANDLERS.append(file_handler)

    if debug_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)
        _INSTALLED_HANDLERS.append(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info("=" * 60)
    root_logger.info(
        "AutoDispose logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )
    root_logger.info("=" * 60)


_SHORT_NAME_OVERRIDES = {
    "core.disposal.registry": "disposal.registry",
    "core.disposal.resolver": "disposal.resolver",
    "core.disposal.entry": "disposal.entry",
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with optional short-name overrides for noisy modules."""
    actual = _SHORT_NAME_OVERRIDES.get(name, name)
    return logging.getLogger(actual)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""

    return _VERBOSE
