"""Remote call proxy for the update service."""

import logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from update_client.api.models import (
    ApplyPayloadRequest,
    BindRequest,
    CallResult,
    ServiceResponse,
)
from update_client.errors import ServiceConnectionError


class RemoteServiceProxy:
    """Call wrapper around the update service's five remote operations.

    Every call either succeeds or returns a failed CallResult carrying a
    description; transport errors never escape. Calls are not retried.
    """

    def __init__(
        self,
        service_url: str = "http://127.0.0.1:12315",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize proxy.

        Args:
            service_url: Base URL of the update service
            timeout: Per-call timeout in seconds, None waits forever
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.logger = logging.getLogger("update_client.proxy")
        self.service_url = service_url.rstrip("/")
        self.api_prefix = "/api/v1.0"
        self._client = httpx.AsyncClient(
            base_url=self.service_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteServiceProxy":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def connect(self) -> None:
        """Probe the service health endpoint.

        Raises:
            ServiceConnectionError: If the service is unreachable or unhealthy
        """
        try:
            response = await self._client.get("/")
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ServiceConnectionError(
                f"Failed to reach update service at {self.service_url}: {e}"
            ) from e

        if not isinstance(body, dict) or body.get("status") != "ok":
            raise ServiceConnectionError(
                f"Update service at {self.service_url} is not healthy: {body}"
            )
        self.logger.debug(f"Connected to update service at {self.service_url}")

    async def suspend(self) -> CallResult:
        return await self._call("suspend")

    async def resume(self) -> CallResult:
        return await self._call("resume")

    async def cancel(self) -> CallResult:
        return await self._call("cancel")

    async def apply_payload(self, uri: str, headers: Sequence[str]) -> CallResult:
        """Ask the service to apply the payload at ``uri`` (must be non-empty)."""
        request = ApplyPayloadRequest(uri=uri, headers=list(headers))
        return await self._call("apply_payload", json=request.model_dump(mode="json"))

    async def bind(self, callback_url: str) -> CallResult:
        """Register the listener reachable at ``callback_url``.

        An ok reply with ``bound`` false is reported as a failure.
        """
        request = BindRequest(callback_url=callback_url)
        result = await self._call("bind", json=request.model_dump(mode="json"))
        if not result.ok:
            return result
        if not result.bound:
            return CallResult.failed("Service refused to bind the listener")
        return result

    async def _call(self, operation: str, json: Optional[dict] = None) -> CallResult:
        endpoint = f"{self.api_prefix}/{operation}"
        self.logger.debug(f"Calling {endpoint}")

        try:
            response = await self._client.post(endpoint, json=json)
            response.raise_for_status()
            envelope = ServiceResponse.model_validate(response.json())
        except httpx.HTTPError as e:
            return CallResult.failed(f"{operation}() transport failure: {e}")
        except (ValueError, ValidationError) as e:
            return CallResult.failed(f"{operation}() malformed reply: {e}")

        if not envelope.is_ok:
            return CallResult.failed(
                f"{operation}() rejected by service: code={envelope.code}, {envelope.msg}"
            )

        bound = None
        if envelope.data is not None and "bound" in envelope.data:
            bound = bool(envelope.data["bound"])
        return CallResult.success(bound=bound)
