"""Callback listener for update service notifications."""

import logging
from typing import Protocol

from update_client.models.outcome import ExitOutcome, OutcomeSource
from update_client.models.status import ErrorCode, describe_error_code, describe_status
from update_client.services.coordinator import ExitCoordinator


class CallbackListener(Protocol):
    """Anything the service can push notifications to."""

    def on_status_update(self, status: int, progress: float) -> None: ...

    def on_payload_application_complete(self, error_code: int) -> None: ...


class UpdateCallback:
    """Logs progress and ends the process on the first completion."""

    def __init__(self, coordinator: ExitCoordinator):
        self.logger = logging.getLogger("update_client.listener")
        self.coordinator = coordinator
        self.completed = False

    def on_status_update(self, status: int, progress: float) -> None:
        self.logger.info(f"onStatusUpdate({describe_status(status)}, {progress})")

    def on_payload_application_complete(self, error_code: int) -> None:
        self.logger.info(
            f"onPayloadApplicationComplete({describe_error_code(error_code)})"
        )
        if self.completed:
            self.logger.warning("Duplicate completion notification ignored")
            return
        self.completed = True

        if error_code == ErrorCode.SUCCESS:
            outcome = ExitOutcome.success()
        else:
            self.logger.error(f"Update failed: {describe_error_code(error_code)}")
            outcome = ExitOutcome.failure()
        self.coordinator.request_exit(outcome, source=OutcomeSource.NOTIFICATION)
