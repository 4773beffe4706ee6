"""Global pytest fixtures and configuration."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from update_client.api.models import CallResult  # noqa: E402
from update_client.services.proxy import RemoteServiceProxy  # noqa: E402


@pytest.fixture
def mock_proxy():
    """Mock RemoteServiceProxy whose calls all succeed."""
    proxy = AsyncMock(spec=RemoteServiceProxy)
    proxy.connect = AsyncMock(return_value=None)
    proxy.suspend = AsyncMock(return_value=CallResult.success())
    proxy.resume = AsyncMock(return_value=CallResult.success())
    proxy.cancel = AsyncMock(return_value=CallResult.success())
    proxy.apply_payload = AsyncMock(return_value=CallResult.success())
    proxy.bind = AsyncMock(return_value=CallResult.success(bound=True))
    return proxy


@pytest.fixture
def mock_callback_server():
    """Mock CallbackServer that never opens a socket."""
    server = MagicMock()
    server.start = AsyncMock()
    server.stop = AsyncMock()
    server.url = "http://127.0.0.1:5555"
    return server


@pytest.fixture
def clean_env(monkeypatch):
    """Remove UPDATE_CLIENT_* overrides from the environment."""
    for name in ("SERVICE_URL", "CALLBACK_HOST", "CALLBACK_PORT", "TIMEOUT",
                 "LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"UPDATE_CLIENT_{name}", raising=False)
