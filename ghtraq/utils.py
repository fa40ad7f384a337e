"""Signature helpers for both legs of the relay."""

from __future__ import annotations

import binascii
import hashlib
import hmac

SIGNATURE_PREFIX_LEN = len("sha256=")


def gh_verify(secret: bytes, body: bytes, signature_header: str | None) -> bool:
    """
    Verify GitHub webhook HMAC signature (X-Hub-Signature-256).

    The first seven characters of the header are the algorithm prefix and
    are dropped; the rest must be the hex encoded HMAC-SHA256 of ``body``.

    Returns
    -------
    bool
        True if valid, False otherwise (including a non-hex tag).
    """
    if not signature_header or len(signature_header) <= SIGNATURE_PREFIX_LEN:
        return False
    try:
        provided = binascii.unhexlify(signature_header[SIGNATURE_PREFIX_LEN:])
    except (binascii.Error, ValueError):
        return False
    mac = hmac.new(secret, msg=body, digestmod=hashlib.sha256).digest()
    return hmac.compare_digest(mac, provided)


def gh_sign(secret: bytes, body: bytes) -> str:
    """Build an ``X-Hub-Signature-256`` header value for ``body``."""
    mac = hmac.new(secret, msg=body, digestmod=hashlib.sha256).hexdigest()
    return f"sha256={mac}"


def traq_signature(secret: bytes, message: str) -> str:
    """
    Hex encoded HMAC-SHA1 of ``message`` for the ``X-TRAQ-Signature`` header.

    traQ verifies webhook posts with SHA-1, so this leg cannot use SHA-256.
    """
    return hmac.new(
        secret, msg=message.encode("utf-8"), digestmod=hashlib.sha1
    ).hexdigest()
