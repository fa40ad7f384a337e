"""Decoding of GitHub webhook deliveries into typed events."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ValidationError

from ghtraq import schemas
from ghtraq.errors import DecodeFailure, UnsupportedEvent

logger = logging.getLogger(__name__)

Patch = Callable[[dict[str, Any]], None]

EVENT_MODELS: dict[str, type[BaseModel]] = {
    "issues": schemas.IssuesEvent,
    "issue_comment": schemas.IssueCommentEvent,
    "pull_request": schemas.PullRequestEvent,
    "pull_request_review": schemas.PullRequestReviewEvent,
    "pull_request_review_comment": schemas.PullRequestReviewCommentEvent,
    "push": schemas.PushEvent,
    "ping": schemas.PingEvent,
}


def _epoch_to_iso(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
    except (OverflowError, ValueError, OSError):
        # out of range or NaN; left as-is, no model reads these fields
        return value


def _default_list(data: Any, *keys: str) -> None:
    if not isinstance(data, dict):
        return
    for key in keys:
        if data.get(key) is None:
            data[key] = []


def _patch_repository(payload: dict[str, Any]) -> None:
    # push payloads carry epoch integers and an owner without "login"
    repo = payload.get("repository")
    if not isinstance(repo, dict):
        return
    for key in ("created_at", "pushed_at"):
        if key in repo:
            repo[key] = _epoch_to_iso(repo[key])
    owner = repo.get("owner")
    if isinstance(owner, dict) and not owner.get("login") and owner.get("name"):
        owner["login"] = owner["name"]


def _patch_issue(payload: dict[str, Any]) -> None:
    issue = payload.get("issue")
    _default_list(issue, "assignees", "labels")
    if isinstance(issue, dict):
        issue.setdefault("body", None)


def _patch_pull_request(payload: dict[str, Any]) -> None:
    pr = payload.get("pull_request")
    _default_list(pr, "assignees", "labels")
    if isinstance(pr, dict):
        pr.setdefault("body", None)
        if pr.get("merged") is None:
            pr["merged"] = False
        if "number" not in payload and "number" in pr:
            payload["number"] = pr["number"]


def _patch_review(payload: dict[str, Any]) -> None:
    review = payload.get("review")
    if isinstance(review, dict):
        review.setdefault("body", None)


def _patch_push(payload: dict[str, Any]) -> None:
    _default_list(payload, "commits")


PATCHES: dict[str, tuple[Patch, ...]] = {
    "issues": (_patch_repository, _patch_issue),
    "issue_comment": (_patch_repository, _patch_issue),
    "pull_request": (_patch_repository, _patch_pull_request),
    "pull_request_review": (_patch_repository, _patch_pull_request, _patch_review),
    "pull_request_review_comment": (_patch_repository, _patch_pull_request),
    "push": (_patch_repository, _patch_push),
    "ping": (_patch_repository,),
}


def patch_payload(event_type: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Normalise provider quirks in ``payload`` (in place) before validation."""
    for patch in PATCHES.get(event_type, ()):
        patch(payload)
    return payload


def event_key(event_type: str | None) -> str:
    return (event_type or "").strip().lower()


def decode(event_type: str | None, body: str | bytes) -> schemas.Event:
    """
    Decode a webhook body into the event variant named by ``event_type``.

    Raises
    ------
    UnsupportedEvent
        ``event_type`` is missing or not one of :data:`EVENT_MODELS`.
    DecodeFailure
        The body is not a JSON object or lacks required fields.
    """
    key = event_key(event_type)
    model = EVENT_MODELS.get(key)
    if model is None:
        raise UnsupportedEvent(event_type)

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeFailure(key, str(exc)) from exc
    if not isinstance(payload, Mapping):
        raise DecodeFailure(key, "payload is not a JSON object")

    payload = patch_payload(key, dict(payload))
    try:
        event = model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeFailure(key, str(exc)) from exc

    logger.debug("decoded %s event as %s", key, type(event).__name__)
    return event
