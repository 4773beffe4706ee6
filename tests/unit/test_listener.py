"""Unit tests for UpdateCallback."""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest

from update_client.models.outcome import ExitOutcome, OutcomeSource
from update_client.models.status import ErrorCode, UpdateStatus
from update_client.services.coordinator import ExitCoordinator
from update_client.services.listener import UpdateCallback


@pytest.mark.unit
class TestUpdateCallback:
    """Test UpdateCallback with a mocked coordinator."""

    @pytest.fixture
    def coordinator(self):
        return MagicMock(spec=ExitCoordinator)

    @pytest.fixture
    def listener(self, coordinator):
        return UpdateCallback(coordinator)

    def test_status_update_is_logged_only(self, listener, coordinator, caplog):
        """onStatusUpdate never requests exit."""
        with caplog.at_level(logging.INFO, logger="update_client.listener"):
            listener.on_status_update(UpdateStatus.DOWNLOADING, 0.25)
            listener.on_status_update(UpdateStatus.FINALIZING, 1.0)

        coordinator.request_exit.assert_not_called()
        assert "onStatusUpdate(DOWNLOADING (3), 0.25)" in caplog.text

    def test_unknown_status_is_tolerated(self, listener, caplog):
        """Unknown status codes are logged rather than rejected."""
        with caplog.at_level(logging.INFO, logger="update_client.listener"):
            listener.on_status_update(42, 0.0)

        assert "UNKNOWN(42)" in caplog.text

    def test_success_completion_requests_ok_exit(self, listener, coordinator):
        """SUCCESS maps to an ok outcome."""
        listener.on_payload_application_complete(ErrorCode.SUCCESS)

        coordinator.request_exit.assert_called_once_with(
            ExitOutcome.success(), source=OutcomeSource.NOTIFICATION
        )

    def test_error_completion_requests_failure(self, listener, coordinator, caplog):
        """Any other code maps to a generic failure and is logged by name."""
        with caplog.at_level(logging.INFO, logger="update_client.listener"):
            listener.on_payload_application_complete(
                ErrorCode.DOWNLOAD_PAYLOAD_VERIFICATION_ERROR
            )

        coordinator.request_exit.assert_called_once_with(
            ExitOutcome.failure(), source=OutcomeSource.NOTIFICATION
        )
        assert "DOWNLOAD_PAYLOAD_VERIFICATION_ERROR (12)" in caplog.text

    def test_flagged_completion_requests_failure(self, listener, coordinator, caplog):
        """A negative int32 with DEV_MODE set is a failure, logged with its flags."""
        with caplog.at_level(logging.INFO, logger="update_client.listener"):
            listener.on_payload_application_complete((1 << 31 | 9) - (1 << 32))

        coordinator.request_exit.assert_called_once_with(
            ExitOutcome.failure(), source=OutcomeSource.NOTIFICATION
        )
        assert "DOWNLOAD_TRANSFER_ERROR (9) [DEV_MODE]" in caplog.text

    def test_duplicate_completion_is_ignored(self, listener, coordinator):
        """A second completion does not request exit again."""
        listener.on_payload_application_complete(ErrorCode.SUCCESS)
        listener.on_payload_application_complete(ErrorCode.DOWNLOAD_WRITE_ERROR)

        assert coordinator.request_exit.call_count == 1
        assert listener.completed is True

    @pytest.mark.asyncio
    async def test_duplicate_completion_keeps_first_outcome(self):
        """With a real coordinator the first completion decides the exit code."""
        coordinator = ExitCoordinator(asyncio.get_running_loop())
        coordinator.start_listening()
        listener = UpdateCallback(coordinator)

        listener.on_payload_application_complete(ErrorCode.SUCCESS)
        listener.on_payload_application_complete(ErrorCode.ERROR)

        assert await coordinator.wait() == 0
