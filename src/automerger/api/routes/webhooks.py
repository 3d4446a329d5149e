"""Webhook endpoint - every delivery is one independent run."""

import hashlib
import hmac
import json
import logging
from typing import Annotated

from fastapi import APIRouter, Header, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from automerger.api.dependencies import RunnerDep, SettingsDep
from automerger.api.models import APIResponse, RunSummaryResponse, summary_to_response
from automerger.events import parse_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check an `X-Hub-Signature-256` header against the raw request body."""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(f"sha256={expected}", signature)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@router.post(
    "/webhooks/github",
    response_model=APIResponse[RunSummaryResponse],
)
async def receive_github_webhook(
    request: Request,
    settings: SettingsDep,
    runner: RunnerDep,
    x_github_event: Annotated[str, Header()],
    x_github_delivery: Annotated[str | None, Header()] = None,
    x_hub_signature_256: Annotated[str | None, Header()] = None,
) -> APIResponse[RunSummaryResponse] | JSONResponse:
    """Route a webhook delivery and run the merge pipeline for it."""
    body = await request.body()

    if settings.webhook_secret and not verify_signature(
        settings.webhook_secret, body, x_hub_signature_256
    ):
        logger.warning("Rejected delivery %s: bad signature", x_github_delivery)
        return _error(status.HTTP_401_UNAUTHORIZED, "Invalid signature")

    try:
        payload = json.loads(body or b"{}")
    except json.JSONDecodeError:
        return _error(status.HTTP_400_BAD_REQUEST, "Payload is not valid JSON")
    if not isinstance(payload, dict):
        return _error(status.HTTP_400_BAD_REQUEST, "Payload must be a JSON object")

    if x_github_event == "ping":
        return APIResponse(
            data=RunSummaryResponse(event="ping", delivery=x_github_delivery, note="pong")
        )

    repository = (payload.get("repository") or {}).get("full_name")
    if repository is not None and repository.lower() != settings.repository.lower():
        logger.warning("Rejected delivery %s for repository %s", x_github_delivery, repository)
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            f"Repository '{repository}' is not configured",
        )

    event = parse_event(x_github_event, payload)
    logger.info("Delivery %s: %s", x_github_delivery, event.name)
    summary = await run_in_threadpool(runner, settings, event)
    return APIResponse(data=summary_to_response(summary, delivery=x_github_delivery))
