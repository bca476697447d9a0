# Area: Router Tests
# PRD: docs/prd-turnflow.md
"""Tests for OutboundTask."""

from concurrent.futures import Future
from unittest.mock import Mock

from turnflow._router.messages import OutboundCompleted
from turnflow._router.outbound import OutboundTask
from turnflow.errors import PlatformError


class TestOutboundTask:
    """Tests for completion delivery of outbound tasks."""

    def test_posts_completion_when_done(self):
        """Test a finished future posts OutboundCompleted."""
        post = Mock()
        future = Future()
        task = OutboundTask("end_turn", "m1", future, post).start()
        post.assert_not_called()

        future.set_result(None)

        post.assert_called_once()
        message = post.call_args[0][0]
        assert isinstance(message, OutboundCompleted)
        assert message.task is task
        assert task.error() is None

    def test_already_done_future_posts_at_start(self):
        """Test an immediately resolved future still posts once."""
        post = Mock()
        future = Future()
        future.set_result("x")

        task = OutboundTask("send_exchange", "m1", future, post).start()

        post.assert_called_once()
        assert task.result() == "x"

    def test_cancelled_task_posts_nothing(self):
        """Test a cancelled task never delivers its completion."""
        post = Mock()
        future = Future()
        future.set_running_or_notify_cancel()
        task = OutboundTask("save_merged_state", "m1", future, post).start()

        task.cancel()
        future.set_result(None)

        assert task.cancelled
        post.assert_not_called()

    def test_platform_error_passes_through(self):
        """Test a PlatformError from the platform is kept as is."""
        future = Future()
        error = PlatformError("end_turn", "m1", "offline")
        future.set_exception(error)

        task = OutboundTask("end_turn", "m1", future, Mock())
        assert task.error() is error

    def test_other_errors_become_platform_errors(self):
        """Test foreign exceptions are wrapped with the operation."""
        future = Future()
        future.set_exception(TimeoutError("took too long"))

        error = OutboundTask("end_match", "m1", future, Mock()).error()

        assert isinstance(error, PlatformError)
        assert error.operation == "end_match"
        assert error.reason == "took too long"
