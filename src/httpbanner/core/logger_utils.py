"""
Logging utility for httpbanner.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional
from datetime import datetime
from logging.handlers import RotatingFileHandler
from decouple import config

from rich.console import Console
from rich.logging import RichHandler


class BannerLogger:
    """
    Logger for httpbanner with support for:
    - Rich console output or a plain stream handler
    - Optional rotating file log
    - Environment-based configuration
    """

    def __init__(
        self,
        name: str = "httpbanner",
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
        log_dir: Optional[str] = None,
        enable_console: bool = True,
        enable_file: Optional[bool] = None,
        use_rich: bool = True,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). If None, reads from LOG_LEVEL env var
            log_file: Log file name. If None, uses <name>_<date>.log
            log_dir: Directory for log files. If None, reads LOG_DIR env var
            enable_console: Enable console logging
            enable_file: Enable file logging. If None, reads HTTPBANNER_LOG_TO_FILE env var
            use_rich: Use Rich for console output
            max_bytes: Maximum log file size before rotation
            backup_count: Number of rotated log files to keep
        """
        self.name = name
        self.logger = logging.getLogger(name)

        if log_level is None:
            log_level = config("LOG_LEVEL", default="INFO")

        level = getattr(logging, str(log_level).upper(), logging.INFO)
        self.logger.setLevel(level)

        if self.logger.handlers:
            self.logger.handlers.clear()

        self.logger.propagate = False

        if log_dir is None:
            log_dir = config("LOG_DIR", default="logs")
        self.log_dir = Path(log_dir)

        if log_file is None:
            log_file = f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
        self.log_file = self.log_dir / log_file

        if enable_file is None:
            enable_file = config("HTTPBANNER_LOG_TO_FILE", default=False, cast=bool)

        if enable_console:
            self._setup_console_handler(use_rich)

        if enable_file:
            self._setup_file_handler(max_bytes, backup_count)

    def _setup_console_handler(self, use_rich: bool) -> None:
        """Setup console handler with optional Rich formatting."""
        if use_rich:
            console_handler: logging.Handler = RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )
        else:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        console_handler.setLevel(logging.DEBUG)
        self.logger.addHandler(console_handler)

    def _setup_file_handler(self, max_bytes: int, backup_count: int) -> None:
        """Setup rotating file handler, falling back to console only if the directory is not writable."""
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            self.logger.warning(
                f"Cannot create log file {self.log_file}: {e}. "
                "File logging disabled."
            )
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self.logger.addHandler(file_handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(message, *args, **kwargs)


_default_logger: Optional[BannerLogger] = None


def get_logger(
    name: str = "httpbanner",
    log_level: Optional[str] = None,
    **kwargs,
) -> BannerLogger:
    """
    Get or create a logger instance.

    The default ``httpbanner`` logger is created once and reused.

    Args:
        name: Logger name
        log_level: Log level override
        **kwargs: Additional arguments passed to BannerLogger

    Returns:
        BannerLogger instance
    """
    global _default_logger

    if name == "httpbanner" and _default_logger is not None:
        return _default_logger

    new_logger = BannerLogger(name=name, log_level=log_level, **kwargs)

    if name == "httpbanner":
        _default_logger = new_logger

    return new_logger
