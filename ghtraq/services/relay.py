"""The relay pipeline: verify, decode, compose, deliver."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ghtraq.config import Settings
from ghtraq.errors import AuthenticationFailure
from ghtraq.services import traq
from ghtraq.services.compose import compose
from ghtraq.services.github import decode, event_key
from ghtraq.utils import gh_verify

logger = logging.getLogger(__name__)

SENT = "sent"
SKIPPED = "skipped"


@dataclass(frozen=True)
class RelayResult:
    event_type: str
    status: str


def authenticate(settings: Settings, body: bytes, signature: str | None) -> None:
    if not gh_verify(settings.github_secret.encode(), body, signature):
        raise AuthenticationFailure("signature mismatch")


async def relay(
    settings: Settings,
    event_type: str | None,
    body: bytes,
    signature: str | None,
) -> RelayResult:
    """
    Process one webhook delivery end to end.

    Raises ``AuthenticationFailure``, ``UnsupportedEvent``, ``DecodeFailure``
    or ``DeliveryFailure``; nothing is sent unless every earlier step
    succeeded.
    """
    authenticate(settings, body, signature)
    event = decode(event_type, body)
    key = event_key(event_type)

    message = compose(event)
    if message is None:
        return RelayResult(event_type=key, status=SKIPPED)

    await traq.post_message(
        message.text,
        settings.traq_secret.encode(),
        settings.traq_webhook_url,
        timeout=settings.http_timeout_seconds,
    )
    logger.info("%s event relayed", key)
    return RelayResult(event_type=key, status=SENT)
