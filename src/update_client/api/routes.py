"""Callback endpoints the update service pushes notifications to."""

from fastapi import APIRouter, Request

from update_client.api.models import AckResponse, CompletionPayload, StatusUpdatePayload

router = APIRouter(prefix="/callback")


@router.post("/status", response_model=AckResponse)
async def post_status(payload: StatusUpdatePayload, request: Request):
    """POST /callback/status - onStatusUpdate(status, progress).

    Request format:
        {"status": 3, "progress": 0.42}
    """
    request.app.state.listener.on_status_update(payload.status, payload.progress)
    return AckResponse()


@router.post("/complete", response_model=AckResponse)
async def post_complete(payload: CompletionPayload, request: Request):
    """POST /callback/complete - onPayloadApplicationComplete(error_code).

    Request format:
        {"error_code": 0}
    """
    request.app.state.listener.on_payload_application_complete(payload.error_code)
    return AckResponse()
