"""Ruter GH?"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse

from ghtraq.config import Settings
from ghtraq.errors import (
    AuthenticationFailure,
    DecodeFailure,
    DeliveryFailure,
    UnsupportedEvent,
)
from ghtraq.services.relay import SENT, relay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["github"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post("/webhook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    x_hub_signature_256: str | None = Header(None),
    x_github_event: str | None = Header(None),
):
    """
    GitHub webhook endpoint.

    The payload signature is validated against `X-Hub-Signature-256`, the
    body is decoded according to `X-GitHub-Event` and the composed message
    is forwarded to the configured traQ webhook.
    """
    body = await request.body()
    try:
        result = await relay(settings, x_github_event, body, x_hub_signature_256)
    except AuthenticationFailure:
        logger.warning("rejected %s delivery: invalid signature", x_github_event or "-")
        raise HTTPException(401, "unauthorized")
    except UnsupportedEvent as exc:
        logger.info("ignored %s", exc)
        return "ignored"
    except DecodeFailure as exc:
        logger.warning("%s", exc)
        raise HTTPException(400, str(exc))
    except DeliveryFailure as exc:
        raise HTTPException(502, f"post failed: {exc}")

    if result.status == SENT:
        return f"{result.event_type} event forwarded"
    return "skipped"
