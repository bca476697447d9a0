# Area: Shared
# PRD: docs/prd-turnflow.md
"""
turnflow._shared.logging_config — Structured logging setup
==========================================================

Configures dual logging: terminal (colored) + file (JSON lines).
Provides structured logging of invariant violations.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..errors import InvariantViolation

# Package logger
logger = logging.getLogger("turnflow")


class TerminalFormatter(logging.Formatter):
    """Colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so the file handler keeps the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """JSON formatter for file output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("invariant", "match_id"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(
    log_file_path: str = "turnflow.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the log file. Defaults to 'turnflow.log' in current dir.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("turnflow")
    pkg_logger.setLevel(level)
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning("Could not create log file: %s", e)

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_error_block(error: "InvariantViolation") -> None:
    """
    Log an invariant violation in the structured format.

    The framed block goes to stderr as-is; the log file receives one
    JSON record tagged with the broken invariant.
    """
    print(error.format_error_log(), file=sys.stderr)
    logger.error(
        "Invariant violation: %s",
        error.detail,
        extra={"invariant": error.invariant},
    )
