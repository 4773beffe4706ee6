"""Entry point for the update engine client."""

import asyncio
import sys
from typing import Optional, Sequence

import httpx

from update_client.cli import parse_options
from update_client.config import ClientConfig
from update_client.errors import UsageError
from update_client.models.options import OptionSet
from update_client.models.outcome import EXIT_FAILURE
from update_client.services.callback_server import CallbackServer
from update_client.services.coordinator import ExitCoordinator
from update_client.services.dispatcher import CommandDispatcher
from update_client.services.listener import UpdateCallback
from update_client.services.proxy import RemoteServiceProxy
from update_client.utils.logging import setup_logger


async def run_client(
    options: OptionSet,
    config: ClientConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Run one invocation on the current event loop.

    The loop, proxy, coordinator and callback server are created here and
    injected into the dispatcher.

    Returns:
        Process exit code
    """
    loop = asyncio.get_running_loop()
    coordinator = ExitCoordinator(loop)
    callback_server = CallbackServer(
        UpdateCallback(coordinator), config.callback_host, config.callback_port
    )

    async with RemoteServiceProxy(
        config.service_url, timeout=config.timeout, transport=transport
    ) as proxy:
        dispatcher = CommandDispatcher(options, proxy, coordinator, callback_server)
        try:
            return await dispatcher.execute()
        finally:
            await callback_server.stop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse flags, configure logging and run the client.

    Returns:
        0 on success, 1 on any failure
    """
    try:
        config = ClientConfig.from_env()
    except UsageError as e:
        setup_logger("update_client").error(str(e))
        return EXIT_FAILURE

    logger = setup_logger(
        "update_client", config.log_file, level=config.log_level_value
    )

    try:
        options = parse_options(argv)
    except UsageError as e:
        logger.error(f"{e}. Run with --help for help.")
        return EXIT_FAILURE

    try:
        return asyncio.run(run_client(options, config))
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
