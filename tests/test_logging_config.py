# Area: Shared Tests
# PRD: docs/prd-turnflow.md
"""Tests for logging setup and invariant violation logging."""

import json
import logging

import pytest

from turnflow._shared.logging_config import (
    JSONFormatter,
    TerminalFormatter,
    log_error_block,
    setup_logging,
)
from turnflow.errors import InvariantViolation


@pytest.fixture
def restore_logger():
    pkg_logger = logging.getLogger("turnflow")
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield pkg_logger
    for handler in pkg_logger.handlers:
        if handler not in handlers:
            handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("turnflow.test", level, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


class TestFormatters:
    """Tests for the terminal and JSON formatters."""

    def test_terminal_colors_level_only_on_copy(self):
        """Test the record handed to other handlers keeps its level name."""
        record = make_record(level=logging.WARNING)
        output = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "\033[33mWARNING\033[0m" in output
        assert record.levelname == "WARNING"

    def test_json_includes_invariant(self):
        """Test structured extras reach the JSON line."""
        data = json.loads(JSONFormatter().format(make_record(invariant="fold-once", match_id="m1")))

        assert data["level"] == "INFO"
        assert data["logger"] == "turnflow.test"
        assert data["message"] == "hello"
        assert data["invariant"] == "fold-once"
        assert data["match_id"] == "m1"


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_terminal_and_file_handlers(self, tmp_path, restore_logger):
        """Test both handlers are installed and the root logger is left alone."""
        log_file = tmp_path / "logs" / "turnflow.log"

        setup_logging(str(log_file), level=logging.DEBUG)

        kinds = [type(h) for h in restore_logger.handlers]
        assert logging.StreamHandler in kinds
        assert logging.FileHandler in kinds
        assert restore_logger.propagate is False
        assert restore_logger.level == logging.DEBUG

        logging.getLogger("turnflow.session").info("started")
        for handler in restore_logger.handlers:
            handler.flush()
        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["message"] == "started"

    def test_repeated_setup_does_not_duplicate(self, tmp_path, restore_logger):
        """Test calling setup twice keeps one handler of each kind."""
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(restore_logger.handlers) == 2


class TestLogErrorBlock:
    """Tests for log_error_block()."""

    def test_prints_block_and_logs(self, capsys, restore_logger, caplog):
        """Test the framed block goes to stderr and the error is logged."""
        restore_logger.propagate = True
        error = InvariantViolation("dismiss-visible-only", "not visible", {"category": "INFORMATIONAL"})

        with caplog.at_level(logging.ERROR, logger="turnflow"):
            log_error_block(error)

        err = capsys.readouterr().err
        assert "INVARIANT VIOLATION" in err
        assert "dismiss-visible-only" in err
        assert '"category": "INFORMATIONAL"' in err
        assert caplog.records[-1].invariant == "dismiss-visible-only"
