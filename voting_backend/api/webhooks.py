import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from voting_backend.api.dependencies import verify_webhook_auth
from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.webhooks.base import WebhookResponse
from voting_backend.services.integrations.webhooks.chainhook import ChainhookService

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter(prefix="/api/chainhooks")

WEBHOOK_PATH = "/api/chainhooks/webhook"


def _internal_error(kind: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "errorKind": kind},
    )


@router.post("/webhook", response_model=WebhookResponse)
async def chainhook(
    request: Request,
    _: None = Depends(verify_webhook_auth),
):
    """Handle a chainhook webhook.

    This endpoint requires Bearer token authentication via the Authorization header.
    The token must match the one configured in VOTING_WEBHOOK_AUTH_TOKEN.

    The body is read raw so that malformed JSON is reported as such instead
    of as a validation error. A body that is not an object carries no events
    and is acknowledged with ``processed = 0``.

    Args:
        request: The incoming request

    Returns:
        WebhookResponse: ``success`` and the number of ``apply`` entries received
    """
    try:
        data: Any = json.loads(await request.body())
    except ValueError as e:
        logger.error(
            "Chainhook payload is not valid JSON",
            extra={"event_type": "chainhook_webhook", "error": str(e)},
            exc_info=True,
        )
        return _internal_error("MalformedPayload")

    service = ChainhookService()
    try:
        logger.debug(
            "Chainhook webhook received", extra={"event_type": "chainhook_webhook"}
        )
        result = await service.process(data)
        logger.info("Chainhook processing completed")
    except Exception as e:
        logger.error(
            "Chainhook processing failed", extra={"error": str(e)}, exc_info=True
        )
        return _internal_error("ProcessingError")

    return WebhookResponse(success=True, processed=result["processed"])


@router.get("/webhook")
async def chainhook_status() -> Dict[str, str]:
    """Report that the webhook endpoint is ready."""
    return {
        "status": "active",
        "endpoint": WEBHOOK_PATH,
        "message": "Chainhook webhook endpoint is ready to receive events",
    }
