"""Typed GitHub webhook payloads.

Only the fields the relay renders are declared and validated; everything
else GitHub sends is kept as extra data. Models are frozen: an event is
never mutated after it has been decoded.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")


class User(_Payload):
    login: str
    html_url: str = ""


class Repository(_Payload):
    name: str
    full_name: str = ""
    owner: User
    html_url: str


class Label(_Payload):
    name: str
    color: str = ""
    url: str = ""


class Issue(_Payload):
    number: int
    title: str
    html_url: str
    body: Optional[str] = None
    state: str = ""
    user: Optional[User] = None
    assignee: Optional[User] = None
    assignees: list[User] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)


class PullRequest(_Payload):
    number: int
    title: str
    html_url: str
    body: Optional[str] = None
    state: str = ""
    merged: bool = False
    user: Optional[User] = None
    assignee: Optional[User] = None
    assignees: list[User] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)


class Comment(_Payload):
    body: str
    html_url: str
    user: Optional[User] = None


class Review(_Payload):
    html_url: str
    body: Optional[str] = None
    state: str = ""
    user: Optional[User] = None


class CommitAuthor(_Payload):
    name: str
    email: str = ""
    username: Optional[str] = None


class Commit(_Payload):
    id: str
    message: str
    timestamp: str
    url: str
    author: CommitAuthor


class Hook(_Payload):
    id: Optional[int] = None
    type: str = ""
    events: list[str] = Field(default_factory=list)


class IssuesEvent(_Payload):
    action: str
    issue: Issue
    repository: Repository
    sender: User
    assignee: Optional[User] = None
    label: Optional[Label] = None


class IssueCommentEvent(_Payload):
    action: str
    issue: Issue
    comment: Comment
    repository: Repository
    sender: User


class PullRequestEvent(_Payload):
    action: str
    number: int
    pull_request: PullRequest
    repository: Repository
    sender: User
    assignee: Optional[User] = None
    requested_reviewer: Optional[User] = None


class PullRequestReviewEvent(_Payload):
    action: str
    review: Review
    pull_request: PullRequest
    repository: Repository
    sender: User


class PullRequestReviewCommentEvent(_Payload):
    action: str
    comment: Comment
    pull_request: PullRequest
    repository: Repository
    sender: User


class PushEvent(_Payload):
    ref: str
    repository: Repository
    sender: User
    before: str = ""
    after: str = ""
    compare: str = ""
    created: bool = False
    deleted: bool = False
    forced: bool = False
    commits: list[Commit] = Field(default_factory=list)
    pusher: Optional[CommitAuthor] = None


class PingEvent(_Payload):
    zen: str = ""
    hook_id: Optional[int] = None
    hook: Optional[Hook] = None
    repository: Optional[Repository] = None
    sender: Optional[User] = None


Event = Union[
    IssuesEvent,
    IssueCommentEvent,
    PullRequestEvent,
    PullRequestReviewEvent,
    PullRequestReviewCommentEvent,
    PushEvent,
    PingEvent,
]
