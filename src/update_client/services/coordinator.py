"""Exit coordination: one exit outcome per process, delivered via the loop."""

import asyncio
import logging
from typing import Optional

from update_client.errors import SchedulingFailure
from update_client.models.outcome import (
    EXIT_FAILURE,
    EXIT_OK,
    ExitOutcome,
    OutcomeSource,
)


class ExitCoordinator:
    """Single authority that turns outcomes into the process exit code.

    Exit is never performed inline: the first accepted request queues a
    termination task on the event loop, so replies already in flight for
    the call that triggered it complete first. Later requests are no-ops.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        """Initialize coordinator.

        Args:
            loop: Event loop that runs the deferred exit task
        """
        self.logger = logging.getLogger("update_client.coordinator")
        self._loop = loop
        self._exit_future: asyncio.Future = loop.create_future()
        self._outcome: Optional[ExitOutcome] = None
        self.listening = False

    @property
    def outcome(self) -> Optional[ExitOutcome]:
        """The accepted outcome, or None if no exit was requested yet."""
        return self._outcome

    def start_listening(self) -> None:
        """Keep running until a notification requests exit."""
        self.listening = True

    def request_exit(
        self, outcome: ExitOutcome, source: OutcomeSource = OutcomeSource.CALL
    ) -> int:
        """Request process exit with ``outcome``.

        While listening, a successful call result does not end the process;
        only failures and notifications do.

        Args:
            outcome: Outcome to exit with
            source: What produced the outcome

        Returns:
            EXIT_OK if the request was queued or ignored, EXIT_FAILURE if the
            exit task could not be queued
        """
        if self._outcome is not None:
            self.logger.debug(
                f"Exit already requested with code {self._outcome.code}, "
                f"ignoring {source.value} outcome {outcome.code}"
            )
            return EXIT_OK

        if self.listening and source is OutcomeSource.CALL and outcome.ok:
            self.logger.debug("Call succeeded, waiting for completion notification")
            return EXIT_OK

        try:
            self._enqueue(outcome)
        except SchedulingFailure as e:
            self.logger.error(str(e))
            return EXIT_FAILURE

        self._outcome = outcome
        self.logger.debug(f"Deferred exit queued with code {outcome.code} ({source.value})")
        return EXIT_OK

    async def wait(self) -> int:
        """Wait for the deferred exit task and return the exit code."""
        return await self._exit_future

    def _enqueue(self, outcome: ExitOutcome) -> None:
        try:
            self._loop.call_soon(self._quit, outcome)
        except RuntimeError as e:
            raise SchedulingFailure(f"Failed to schedule deferred exit: {e}") from e

    def _quit(self, outcome: ExitOutcome) -> None:
        self.listening = False
        if not self._exit_future.done():
            self._exit_future.set_result(outcome.code)
