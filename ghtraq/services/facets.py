"""Facets: small, named views over a decoded event.

Every facet is a :func:`functools.singledispatch` function. A variant
supports a facet when an implementation is registered for its type; calling
a facet on any other variant raises :class:`ContractViolation` straight
away. A supported facet may still return ``None`` (or an empty list) when
the payload carries nothing for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from functools import singledispatch
from typing import Any, Callable, Iterable, Optional

from ghtraq import schemas
from ghtraq.errors import ContractViolation

SHORT_ID_LEN = 7
ASSIGNEE_VERBS = frozenset({"assigned", "unassigned"})
REVIEWER_VERBS = frozenset({"review_requested", "review_request_removed"})

FACETS: dict[str, Callable[..., Any]] = {}


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str
    url: str

    def md(self) -> str:
        return f"[{self.owner}/{self.name}]({self.url})"


@dataclass(frozen=True)
class Issue:
    number: int
    title: str
    url: str

    def md(self) -> str:
        return f"[#{self.number} {self.title}]({self.url})"


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    url: str

    def md(self) -> str:
        return f"[#{self.number} {self.title}]({self.url})"


@dataclass(frozen=True)
class Action:
    verb: str
    actor: str
    assignee: Optional[str] = None

    def md(self) -> str:
        if self.assignee:
            return f"{self.verb} to `{self.assignee}` by `{self.actor}`"
        return f"{self.verb} by `{self.actor}`"


@dataclass(frozen=True)
class Assignee:
    name: str

    def md(self) -> str:
        return self.name


@dataclass(frozen=True)
class Label:
    name: str
    color: str
    url: str

    def md(self) -> str:
        return f"[{self.name}]({self.url})"


@dataclass(frozen=True)
class Commit:
    short_id: str
    url: str
    message: str
    author: str
    timestamp: str

    def md(self) -> str:
        return f"[{self.short_id}]({self.url}) - {self.message} {self.timestamp} {self.author}"


@dataclass(frozen=True)
class Comment:
    body: str
    author: str

    def md(self) -> str:
        return self.body


@dataclass(frozen=True)
class Review:
    url: str
    body: Optional[str] = None

    def md(self, title: str = "Review") -> str:
        return f"[{title}]({self.url})"


def _facet(name: str) -> Callable[[Callable[..., Any]], Any]:
    def decorator(func: Callable[..., Any]) -> Any:
        dispatcher = singledispatch(func)
        FACETS[name] = dispatcher
        return dispatcher

    return decorator


def supports(facet: str, event: object) -> bool:
    """Return True when ``event``'s variant registers the named facet."""
    dispatcher = FACETS.get(facet)
    if dispatcher is None:
        return False
    return dispatcher.dispatch(type(event)) is not dispatcher.registry[object]


def _verb(action: str) -> str:
    # "review_requested" -> "ReviewRequested"
    return "".join(part.capitalize() for part in action.split("_"))


def _first_line(text: str | None) -> str:
    if not text:
        return ""
    return text.splitlines()[0]


def _format_timestamp(raw: str) -> str:
    try:
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return "time parse error"
    return f"{ts:%a %b} {ts.day:>2} {ts:%H:%M:%S %Y %z}".rstrip()


def _dedupe(items: Iterable[Any], key: Callable[[Any], str]) -> list[Any]:
    seen: set[str] = set()
    out = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out


def _to_repository(repo: schemas.Repository) -> Repository:
    return Repository(owner=repo.owner.login, name=repo.name, url=repo.html_url)


def _login(user: schemas.User | None) -> Optional[str]:
    return user.login if user else None


# repository ---------------------------------------------------------------


@_facet("repo")
def repo(event: object) -> Optional[Repository]:
    raise ContractViolation("repo", event)


@repo.register(schemas.IssuesEvent)
@repo.register(schemas.IssueCommentEvent)
@repo.register(schemas.PullRequestEvent)
@repo.register(schemas.PullRequestReviewEvent)
@repo.register(schemas.PullRequestReviewCommentEvent)
@repo.register(schemas.PushEvent)
def _repo_from_payload(event) -> Optional[Repository]:
    return _to_repository(event.repository)


@repo.register(schemas.PingEvent)
def _repo_from_ping(event: schemas.PingEvent) -> Optional[Repository]:
    if event.repository is None:
        return None
    return _to_repository(event.repository)


# issue / pull request ------------------------------------------------------


@_facet("issue")
def issue(event: object) -> Optional[Issue]:
    raise ContractViolation("issue", event)


@issue.register(schemas.IssuesEvent)
@issue.register(schemas.IssueCommentEvent)
def _issue(event) -> Optional[Issue]:
    i = event.issue
    return Issue(number=i.number, title=i.title, url=i.html_url)


@_facet("pull_request")
def pull_request(event: object) -> Optional[PullRequest]:
    raise ContractViolation("pull_request", event)


@pull_request.register(schemas.PullRequestEvent)
@pull_request.register(schemas.PullRequestReviewEvent)
@pull_request.register(schemas.PullRequestReviewCommentEvent)
def _pull_request(event) -> Optional[PullRequest]:
    pr = event.pull_request
    return PullRequest(number=pr.number, title=pr.title, url=pr.html_url)


# action -------------------------------------------------------------------


@_facet("action")
def action(event: object) -> Optional[Action]:
    raise ContractViolation("action", event)


@action.register(schemas.IssuesEvent)
def _issues_action(event: schemas.IssuesEvent) -> Optional[Action]:
    assignee = None
    if event.action in ASSIGNEE_VERBS:
        assignee = _login(event.assignee) or _login(event.issue.assignee)
    return Action(verb=_verb(event.action), actor=event.sender.login, assignee=assignee)


@action.register(schemas.IssueCommentEvent)
@action.register(schemas.PullRequestReviewEvent)
@action.register(schemas.PullRequestReviewCommentEvent)
def _plain_action(event) -> Optional[Action]:
    return Action(verb=_verb(event.action), actor=event.sender.login)


@action.register(schemas.PullRequestEvent)
def _pull_request_action(event: schemas.PullRequestEvent) -> Optional[Action]:
    pr = event.pull_request
    assignee = None
    if event.action == "closed":
        verb = "Merged" if pr.merged else "Closed"
    else:
        verb = _verb(event.action)
        if event.action in ASSIGNEE_VERBS:
            assignee = _login(event.assignee) or _login(pr.assignee)
        elif event.action in REVIEWER_VERBS:
            assignee = _login(event.requested_reviewer)
    return Action(verb=verb, actor=event.sender.login, assignee=assignee)


@action.register(schemas.PushEvent)
def _push_action(event: schemas.PushEvent) -> Optional[Action]:
    count = len(event.commits)
    if count == 0:
        return None
    noun = "commit" if count == 1 else "commits"
    return Action(verb=f"{count} {noun} pushed to `{event.ref}`", actor=event.sender.login)


# lists --------------------------------------------------------------------


@_facet("assignees")
def assignees(event: object) -> list[Assignee]:
    raise ContractViolation("assignees", event)


@assignees.register(schemas.IssuesEvent)
@assignees.register(schemas.IssueCommentEvent)
def _issue_assignees(event) -> list[Assignee]:
    users = event.issue.assignees or [u for u in (event.issue.assignee,) if u]
    return [Assignee(u.login) for u in _dedupe(users, lambda u: u.login)]


@assignees.register(schemas.PullRequestEvent)
@assignees.register(schemas.PullRequestReviewEvent)
@assignees.register(schemas.PullRequestReviewCommentEvent)
def _pull_request_assignees(event) -> list[Assignee]:
    pr = event.pull_request
    users = pr.assignees or [u for u in (pr.assignee,) if u]
    return [Assignee(u.login) for u in _dedupe(users, lambda u: u.login)]


@_facet("labels")
def labels(event: object) -> list[Label]:
    raise ContractViolation("labels", event)


@labels.register(schemas.IssuesEvent)
@labels.register(schemas.IssueCommentEvent)
def _issue_labels(event) -> list[Label]:
    found = _dedupe(event.issue.labels, lambda l: l.name)
    return [Label(name=l.name, color=l.color, url=l.url) for l in found]


@labels.register(schemas.PullRequestEvent)
def _pull_request_labels(event: schemas.PullRequestEvent) -> list[Label]:
    found = _dedupe(event.pull_request.labels, lambda l: l.name)
    return [Label(name=l.name, color=l.color, url=l.url) for l in found]


@_facet("commits")
def commits(event: object) -> list[Commit]:
    raise ContractViolation("commits", event)


@commits.register(schemas.PushEvent)
def _push_commits(event: schemas.PushEvent) -> list[Commit]:
    return [
        Commit(
            short_id=c.id[:SHORT_ID_LEN],
            url=c.url,
            message=_first_line(c.message),
            author=c.author.name,
            timestamp=_format_timestamp(c.timestamp),
        )
        for c in event.commits
    ]


# comment / review ---------------------------------------------------------


@_facet("comment")
def comment(event: object) -> Optional[Comment]:
    raise ContractViolation("comment", event)


@comment.register(schemas.IssuesEvent)
def _issue_description(event: schemas.IssuesEvent) -> Optional[Comment]:
    if event.action != "opened" or not event.issue.body:
        return None
    return Comment(body=event.issue.body, author=event.sender.login)


@comment.register(schemas.PullRequestEvent)
def _pull_request_description(event: schemas.PullRequestEvent) -> Optional[Comment]:
    if event.action != "opened" or not event.pull_request.body:
        return None
    return Comment(body=event.pull_request.body, author=event.sender.login)


@comment.register(schemas.IssueCommentEvent)
@comment.register(schemas.PullRequestReviewCommentEvent)
def _explicit_comment(event) -> Optional[Comment]:
    if not event.comment.body:
        return None
    author = _login(event.comment.user) or event.sender.login
    return Comment(body=event.comment.body, author=author)


@comment.register(schemas.PullRequestReviewEvent)
def _review_body(event: schemas.PullRequestReviewEvent) -> Optional[Comment]:
    if not event.review.body:
        return None
    author = _login(event.review.user) or event.sender.login
    return Comment(body=event.review.body, author=author)


@_facet("review")
def review(event: object) -> Optional[Review]:
    raise ContractViolation("review", event)


@review.register(schemas.PullRequestReviewEvent)
def _review(event: schemas.PullRequestReviewEvent) -> Optional[Review]:
    return Review(url=event.review.html_url, body=event.review.body)


@review.register(schemas.PullRequestReviewCommentEvent)
def _review_comment(event: schemas.PullRequestReviewCommentEvent) -> Optional[Review]:
    return Review(url=event.comment.html_url, body=event.comment.body)
