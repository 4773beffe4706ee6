"""Command dispatch: one primary action per invocation."""

import logging
from enum import Enum
from typing import Optional

from update_client.api.models import CallResult
from update_client.errors import (
    CallFailure,
    ServiceConnectionError,
    UpdateClientError,
    UsageError,
)
from update_client.models.options import OptionSet
from update_client.models.outcome import EXIT_OK, ExitOutcome, OutcomeSource
from update_client.services.callback_server import CallbackServer
from update_client.services.coordinator import ExitCoordinator
from update_client.services.proxy import RemoteServiceProxy


class DispatcherState(str, Enum):
    """Dispatcher lifecycle.

    State transitions:
    init → validating → acting → listening → terminated
                ↓          ↓         ↓
                └──────→ finishing ──┴─────→ terminated
    """

    INIT = "init"
    VALIDATING = "validating"
    ACTING = "acting"
    LISTENING = "listening"
    FINISHING = "finishing"
    TERMINATED = "terminated"


class CommandDispatcher:
    """Decides which single action to take and whether to keep running.

    Precedence, first match wins: suspend > resume > cancel > (follow, then
    update). suspend/resume/cancel finish with their call's result.
    """

    def __init__(
        self,
        options: OptionSet,
        proxy: RemoteServiceProxy,
        coordinator: ExitCoordinator,
        callback_server: Optional[CallbackServer] = None,
    ):
        self.logger = logging.getLogger("update_client.dispatcher")
        self.options = options
        self.proxy = proxy
        self.coordinator = coordinator
        self.callback_server = callback_server
        self.state = DispatcherState.INIT
        self._connected = False

    async def execute(self) -> int:
        """Run the action and wait for the deferred exit.

        Returns:
            Process exit code
        """
        status = await self.run()
        if status != EXIT_OK:
            self.state = DispatcherState.TERMINATED
            return status

        code = await self.coordinator.wait()
        self.state = DispatcherState.TERMINATED
        return code

    async def run(self) -> int:
        """Validate, connect and issue the primary action.

        Returns:
            EXIT_OK once an exit is queued or listening started, EXIT_FAILURE
            if the exit task could not be queued
        """
        self.state = DispatcherState.VALIDATING
        try:
            self._validate()
        except UsageError as e:
            self.logger.error(str(e))
            return self._finish(ExitOutcome.failure())

        await self._acquire_service()

        self.state = DispatcherState.ACTING
        try:
            return await self._act()
        except UpdateClientError as e:
            self.logger.error(str(e))
            return self._finish(ExitOutcome.failure())

    def _validate(self) -> None:
        if self.options.positional:
            raise UsageError(
                f"Found a positional argument '{self.options.positional[0]}'. "
                f"If you want to pass a value to a flag, pass it as --flag=value."
            )
        if not self.options.has_action:
            raise UsageError("Nothing to do. Run with --help for help.")

    async def _acquire_service(self) -> None:
        # A failure here only matters to flows that actually call the service.
        try:
            await self.proxy.connect()
            self._connected = True
        except ServiceConnectionError as e:
            self.logger.error(str(e))

    def _service(self) -> RemoteServiceProxy:
        if not self._connected:
            raise ServiceConnectionError("Not connected to the update service")
        return self.proxy

    async def _act(self) -> int:
        options = self.options

        if options.suspend:
            return self._report(await self._service().suspend())
        if options.resume:
            return self._report(await self._service().resume())
        if options.cancel:
            return self._report(await self._service().cancel())

        if options.follow:
            await self._bind()
            self.coordinator.start_listening()
            self.state = DispatcherState.LISTENING

        if options.update:
            if not options.payload_uri:
                raise UsageError("--payload must not be empty")
            result = await self._service().apply_payload(
                options.payload_uri, options.headers
            )
            return self._report(result)

        if self.state is DispatcherState.LISTENING:
            return EXIT_OK
        return self._finish(ExitOutcome.success())

    async def _bind(self) -> None:
        service = self._service()
        if self.callback_server is None:
            raise CallFailure("Failed to bind() the update service: no callback server")

        try:
            await self.callback_server.start(on_stopped=self._on_transport_stopped)
        except OSError as e:
            raise CallFailure(f"Failed to start callback server: {e}") from e

        result = await service.bind(self.callback_server.url)
        if not result.ok:
            raise CallFailure(f"Failed to bind() the update service: {result.description}")
        self.logger.info(f"Bound to update service, listening on {self.callback_server.url}")

    def _report(self, result: CallResult) -> int:
        if not result.ok:
            self.logger.error(result.description)
            return self._finish(ExitOutcome.failure())
        if self.state is DispatcherState.LISTENING:
            return self.coordinator.request_exit(ExitOutcome.success(), OutcomeSource.CALL)
        return self._finish(ExitOutcome.success())

    def _finish(self, outcome: ExitOutcome) -> int:
        self.state = DispatcherState.FINISHING
        return self.coordinator.request_exit(outcome, OutcomeSource.CALL)

    def _on_transport_stopped(self) -> None:
        if self.coordinator.listening:
            self.logger.error("Callback server stopped before the update completed")
        self.coordinator.request_exit(ExitOutcome.failure(), OutcomeSource.TRANSPORT)
