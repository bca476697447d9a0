# Area: Shared
# PRD: docs/prd-turnflow.md
"""
Shared utilities used by the alert queue, the match engines and the session.

This package contains:
- Logging configuration
- Structured logging of invariant violations
"""

from .logging_config import setup_logging, log_error_block

__all__ = [
    "setup_logging",
    "log_error_block",
]
