"""Centralized logging configuration for automerger.

Console output doubles as the diagnostics surface: on a GitHub Actions runner
warnings and errors become workflow annotations and per-PR output is folded
into groups.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default configuration
DEFAULT_LOG_FILE = "automerger.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "automerger"

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


def running_in_actions() -> bool:
    """Whether the process runs on a GitHub Actions runner."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


class ActionsFormatter(logging.Formatter):
    """Formats records as GitHub Actions workflow commands."""

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _WORKFLOW_COMMANDS.get(record.levelno, "")
        if not prefix:
            return message
        # Workflow commands are single-line
        return prefix + message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Set up logging for a run.

    Args:
        log_dir: Directory for a rotating log file. No file is written unless
                 this or the AUTOMERGER_LOG_DIR environment variable is set.
        log_file: Log file name. Defaults to 'automerger.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with AUTOMERGER_LOG_LEVEL environment variable;
               otherwise RUNNER_DEBUG=1 selects DEBUG.
        console: Whether to log to the console. Defaults to True.

    Returns:
        The root automerger logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("AUTOMERGER_LOG_DIR")

    if level is None:
        level = os.environ.get("AUTOMERGER_LOG_LEVEL")
    if level is None:
        # Step debug logging re-run of a workflow
        level = "DEBUG" if os.environ.get("RUNNER_DEBUG") == "1" else DEFAULT_LOG_LEVEL
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / log_file
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ActionsFormatter() if running_in_actions() else formatter)
        logger.addHandler(console_handler)

    logger.debug("automerger logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'pipeline', 'github').
              Will be prefixed with 'automerger.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


@contextmanager
def log_group(title: str, logger: logging.Logger | None = None) -> Iterator[None]:
    """Fold everything logged inside the block under `title`."""
    logger = logger or logging.getLogger(ROOT_LOGGER)
    if running_in_actions():
        logger.info("::group::%s", title)
        try:
            yield
        finally:
            logger.info("::endgroup::")
    else:
        logger.info(title)
        yield


def truncate_output(output: str, max_length: int = 5000) -> str:
    """Truncate long output for logging.

    Args:
        output: The output string to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated string with indicator if truncated.
    """
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove sensitive data from log output.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
        (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
        (r"ghs_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # Actions/installation token
        (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
