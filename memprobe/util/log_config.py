"""
Logging configuration for the memory probe.

Provides centralized logging setup with clean, concise terminal output.
Everything goes to stderr: stdout is reserved for the JSON result document.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Set

# Names handed out by setup_logger, so the CLI can re-apply level/file later
_configured_names: Set[str] = set()


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler with clean formatting
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    # Clean format: [LEVEL] message
    console_formatter = logging.Formatter(
        fmt='[%(levelname)s] %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # Optional file handler with more detailed format
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        file_formatter = logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)
        # let DEBUG records reach the file even when the console is quieter
        logger.setLevel(logging.DEBUG)

    # Prevent propagation to root logger
    logger.propagate = False

    _configured_names.add(name)
    return logger


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Re-apply level and optional log file to every logger created so far."""
    for name in sorted(_configured_names):
        setup_logger(name, level=level, log_file=log_file)
