"""Yet another traQ service: signed webhook posts."""

from __future__ import annotations

import logging

import httpx

from ghtraq.errors import DeliveryFailure
from ghtraq.utils import traq_signature

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = 15
SIGNATURE_HEADER = "X-TRAQ-Signature"
CONTENT_TYPE = "text/plain; charset=utf-8"


def build_headers(message: str, secret: bytes) -> dict[str, str]:
    return {
        SIGNATURE_HEADER: traq_signature(secret, message),
        "Content-Type": CONTENT_TYPE,
    }


async def post_message(
    message: str,
    secret: bytes,
    url: str,
    *,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> httpx.Response:
    """
    Post ``message`` to the traQ webhook at ``url``.

    One attempt only; a transport error or a status >= 300 raises
    :class:`DeliveryFailure`.
    """
    headers = build_headers(message, secret)
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(url, content=message.encode("utf-8"), headers=headers)
    except httpx.HTTPError as exc:
        logger.error("traQ post to %s failed: %s", url, exc)
        raise DeliveryFailure(f"traQ transport error: {exc}") from exc

    if resp.status_code >= 300:
        logger.error("traQ post to %s rejected: %s %s", url, resp.status_code, resp.text)
        raise DeliveryFailure(
            f"traQ error: {resp.status_code} {resp.text}", status_code=resp.status_code
        )

    logger.info("message sent to %s (%s)", url, resp.status_code)
    return resp
