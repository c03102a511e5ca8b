"""Logging setup for ytdlmeta with file and console output"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path

_SIZE_UNITS = {
    "": 1, "B": 1,
    "K": 1024, "KB": 1024,
    "M": 1024**2, "MB": 1024**2,
    "G": 1024**3, "GB": 1024**3,
}


def parse_size(value: str) -> int:
    """
    Parse a human readable size such as "10MB" into bytes.

    Raises:
        ValueError: The value is not a size.
    """
    match = re.fullmatch(r"\s*(\d+)\s*([KMG]?B?)\s*", value.upper())
    if not match:
        raise ValueError(f"Invalid size: {value!r}")
    return int(match.group(1)) * _SIZE_UNITS[match.group(2)]


def setup_logging(
    log_level: str = "INFO",
    log_file_name: str | None = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Set up logging for ytdlmeta.

    This configures logging to write to:
    - Console (stderr, so command output on stdout stays parseable)
    - File with rotation

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_name: Path to log file (can be absolute or relative)
        log_to_console: Whether to log to console
        log_to_file: Whether to log to file
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup files to keep (default 5)
        log_format: Custom log format string

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        log_file_path = Path(log_file_name or "logs/ytdlmeta.log")
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)
        root_logger.debug(f"Log file: {log_file_path}")

    root_logger.debug(f"ytdlmeta logging initialized - Level: {log_level}")
    return root_logger


def setup_logging_from_config() -> logging.Logger:
    """Set up logging from the loaded configuration."""
    from ytdlmeta.config import get_config

    logging_config = get_config().logging
    return setup_logging(
        log_level=logging_config.level,
        log_file_name=logging_config.file,
        log_to_file=logging_config.log_to_file,
        max_bytes=parse_size(logging_config.max_size),
        backup_count=logging_config.backup_count,
        log_format=logging_config.format,
    )
