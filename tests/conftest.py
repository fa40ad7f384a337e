"""Shared fixtures."""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from ghtraq.config import Settings
from ghtraq.utils import gh_sign

GITHUB_SECRET = "gh-secret"
TRAQ_SECRET = "traq-secret"
TRAQ_WEBHOOK_ID = "hook-123"
TRAQ_URL = f"https://q.example.test/api/v3/webhooks/{TRAQ_WEBHOOK_ID}"

REPOSITORY: dict[str, Any] = {
    "id": 1,
    "name": "widget",
    "full_name": "acme/widget",
    "owner": {"login": "acme", "html_url": "https://github.com/acme"},
    "html_url": "https://x",
    "created_at": "2020-01-01T00:00:00Z",
}

SENDER: dict[str, Any] = {"login": "octocat", "html_url": "https://github.com/octocat"}


def _user(login: str) -> dict[str, Any]:
    return {"login": login, "html_url": f"https://github.com/{login}"}


def _label(name: str) -> dict[str, Any]:
    return {"name": name, "color": "ff0000", "url": f"https://x/labels/{name}"}


def make_issues_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "action": "opened",
        "issue": {
            "number": 42,
            "title": "Bug",
            "html_url": "https://x/42",
            "body": "It breaks.",
            "state": "open",
            "user": SENDER,
            "assignee": None,
            "assignees": [],
            "labels": [],
        },
        "repository": copy.deepcopy(REPOSITORY),
        "sender": SENDER,
    }
    payload.update(overrides)
    return payload


def make_issue_comment_payload(**overrides: Any) -> dict[str, Any]:
    payload = make_issues_payload(action="created")
    payload["comment"] = {
        "body": "Me too",
        "html_url": "https://x/42#issuecomment-1",
        "user": _user("hubot"),
    }
    payload.update(overrides)
    return payload


def make_pull_request_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "action": "opened",
        "number": 7,
        "pull_request": {
            "number": 7,
            "title": "Add feature",
            "html_url": "https://x/pull/7",
            "url": "https://api.x/pulls/7",
            "body": "Implements it.",
            "state": "open",
            "merged": False,
            "user": SENDER,
            "assignee": None,
            "assignees": [],
            "labels": [],
        },
        "repository": copy.deepcopy(REPOSITORY),
        "sender": SENDER,
    }
    payload.update(overrides)
    return payload


def make_review_payload(**overrides: Any) -> dict[str, Any]:
    payload = make_pull_request_payload(action="submitted")
    del payload["number"]
    payload["review"] = {
        "html_url": "https://x/pull/7#pullrequestreview-9",
        "body": "Looks good",
        "state": "approved",
        "user": _user("reviewer"),
    }
    payload.update(overrides)
    return payload


def make_review_comment_payload(**overrides: Any) -> dict[str, Any]:
    payload = make_pull_request_payload(action="created")
    del payload["number"]
    payload["comment"] = {
        "body": "Nit: rename this",
        "html_url": "https://x/pull/7#discussion_r1",
        "user": _user("reviewer"),
    }
    payload.update(overrides)
    return payload


def make_commit(sha: str, message: str = "Fix things") -> dict[str, Any]:
    return {
        "id": sha,
        "message": message,
        "timestamp": "2015-05-05T19:40:15-04:00",
        "url": f"https://x/commit/{sha}",
        "author": {"name": "Monalisa", "email": "mona@example.com", "username": "mona"},
    }


def make_push_payload(commits: list[dict[str, Any]] | None = None, **overrides: Any) -> dict[str, Any]:
    repo = copy.deepcopy(REPOSITORY)
    # push deliveries use epoch seconds and an owner keyed by name
    repo["created_at"] = 1577836800
    repo["pushed_at"] = 1577836900
    repo["owner"] = {"name": "acme", "email": None}
    payload: dict[str, Any] = {
        "ref": "refs/heads/main",
        "before": "0" * 40,
        "after": "a" * 40,
        "compare": "https://x/compare/0...a",
        "commits": commits if commits is not None else [make_commit("abcdef1234567")],
        "repository": repo,
        "pusher": {"name": "octocat", "email": "octocat@example.com"},
        "sender": SENDER,
    }
    payload.update(overrides)
    return payload


def make_ping_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "zen": "Keep it logically awesome.",
        "hook_id": 101,
        "hook": {"id": 101, "type": "Repository", "events": ["push"]},
        "repository": copy.deepcopy(REPOSITORY),
        "sender": SENDER,
    }
    payload.update(overrides)
    return payload


def encode(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign(body: bytes, secret: str = GITHUB_SECRET) -> str:
    return gh_sign(secret.encode(), body)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        github_secret=GITHUB_SECRET,
        traq_secret=TRAQ_SECRET,
        traq_webhook_id=TRAQ_WEBHOOK_ID,
        traq_base_url="https://q.example.test/api/v3/webhooks/",
        port=8080,
        http_timeout_seconds=5,
    )


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
