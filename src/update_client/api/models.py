"""Pydantic models for the update service call and callback payloads."""

from typing import Optional

from pydantic import BaseModel, Field


class ApplyPayloadRequest(BaseModel):
    """POST /api/v1.0/apply_payload payload.

    Example:
        {
            "uri": "http://127.0.0.1:8080/payload",
            "headers": ["FILE_HASH=abc", "FILE_SIZE=1024"]
        }
    """

    uri: str = Field(..., min_length=1, description="URI of the update payload")
    headers: list[str] = Field(
        default_factory=list, description="Header lines, one key/value pair each"
    )


class BindRequest(BaseModel):
    """POST /api/v1.0/bind payload.

    The callback URL is the listener handle the service pushes notifications to.
    """

    callback_url: str = Field(
        ..., pattern=r"^https?://.+", description="Base URL of the callback server"
    )


class ServiceResponse(BaseModel):
    """Envelope returned by every service command endpoint.

    HTTP status code is always 200, real status in 'code' field.
    """

    code: int = Field(..., description="Application-level status code (200 = ok)")
    msg: str = Field("", description="Status message or error description")
    data: Optional[dict] = Field(None, description="Optional response data")

    @property
    def is_ok(self) -> bool:
        return self.code == 200


class CallResult(BaseModel):
    """Result of one remote call: success, or failure with a description."""

    ok: bool = Field(..., description="Whether the call succeeded")
    description: Optional[str] = Field(
        None, description="Transport or remote error description if not ok"
    )
    bound: Optional[bool] = Field(None, description="bind() only: listener bound")

    @classmethod
    def success(cls, bound: Optional[bool] = None) -> "CallResult":
        return cls(ok=True, bound=bound)

    @classmethod
    def failed(cls, description: str) -> "CallResult":
        return cls(ok=False, description=description)


class StatusUpdatePayload(BaseModel):
    """POST /callback/status payload pushed by the service."""

    status: int = Field(..., description="UpdateStatus code, unknown values tolerated")
    progress: float = Field(..., description="Progress fraction, nominally 0.0-1.0")


class CompletionPayload(BaseModel):
    """POST /callback/complete payload pushed by the service."""

    error_code: int = Field(
        ..., description="ErrorCode of the application, may carry flag bits"
    )


class AckResponse(BaseModel):
    """Acknowledgment returned to the service for every notification."""

    code: int = Field(default=200, description="Application-level status code (200)")
    msg: str = Field(default="success", description="Acknowledgment message")
