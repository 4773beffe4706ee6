"""In-process HTTP server carrying service notifications to the listener."""

import asyncio
import logging
import socket
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI

from update_client.api.routes import router
from update_client.services.listener import CallbackListener


def create_callback_app(listener: CallbackListener) -> FastAPI:
    """Build the FastAPI app that dispatches notifications to ``listener``."""
    app = FastAPI(
        title="Update Client Callback",
        description="Notification sink for the update service",
        version="1.0.0",
    )
    app.state.listener = listener
    app.include_router(router)
    return app


class CallbackServer:
    """Serves the callback app as a task on the running event loop.

    The socket is bound before serving so the URL handed to bind() is known
    up front, including when an ephemeral port is requested.
    """

    def __init__(
        self, listener: CallbackListener, host: str = "127.0.0.1", port: int = 0
    ):
        """Initialize callback server.

        Args:
            listener: Receiver of status and completion notifications
            host: Interface to listen on (also advertised to the service)
            port: TCP port, 0 picks an ephemeral one
        """
        self.logger = logging.getLogger("update_client.callback_server")
        self.host = host
        self.port = port
        self.app = create_callback_app(listener)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, on_stopped: Optional[Callable[[], None]] = None) -> None:
        """Bind the socket and start serving.

        Args:
            on_stopped: Called once the server task finishes, for any reason

        Raises:
            OSError: If the socket cannot be bound
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind((self.host, self.port))
        except OSError:
            sock.close()
            raise
        self.port = sock.getsockname()[1]

        config = uvicorn.Config(
            self.app,
            log_level="warning",
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._server.serve(sockets=[sock]))
        if on_stopped is not None:
            self._task.add_done_callback(lambda _task: on_stopped())
        self.logger.debug(f"Callback server listening on {self.url}")

    async def stop(self) -> None:
        """Shut down gracefully, letting in-flight replies complete."""
        if self._task is None:
            return
        self._server.should_exit = True
        await self._task
        self.logger.debug("Callback server stopped")
