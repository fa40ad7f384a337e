"""Per-event composers turning a decoded event into a traQ message."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ghtraq import schemas
from ghtraq.services import facets
from ghtraq.services.builder import ContentBuilder
from ghtraq.services.message import Message, MessageBuilder

logger = logging.getLogger(__name__)

Composer = Callable[[Any], MessageBuilder]


def _footer(event: Any) -> Optional[str]:
    return ContentBuilder(event).repo().join_no_separator()


def _list_line(event: Any, heading: str, facet: str) -> Optional[str]:
    if not getattr(facets, facet)(event):
        return None
    builder = ContentBuilder(event).push(f"{heading}:")
    return getattr(builder, facet)().join_with_space()


def _compose_issues(event: schemas.IssuesEvent) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).issue().join_with_space())
        .msg(ContentBuilder(event).action().join_with_space())
        .msg(_list_line(event, "Assignees", "assignees"))
        .msg(_list_line(event, "Labels", "labels"))
        .msg(ContentBuilder(event).comment().join_with_newline() or None)
        .footer(_footer(event))
    )


def _compose_issue_comment(event: schemas.IssueCommentEvent) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).issue().join_with_space())
        .msg(ContentBuilder(event).action().join_with_space())
        .msg(ContentBuilder(event).comment().join_with_newline() or None)
        .footer(_footer(event))
    )


def _compose_pull_request(event: schemas.PullRequestEvent) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).pr().join_with_space() or None)
        .msg(ContentBuilder(event).action().join_with_space())
        .msg(_list_line(event, "Assignees", "assignees"))
        .msg(_list_line(event, "Labels", "labels"))
        .msg(ContentBuilder(event).comment().join_with_newline() or None)
        .footer(_footer(event))
    )


def _compose_pull_request_review(event: schemas.PullRequestReviewEvent) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).pr().join_with_space() or None)
        .msg(ContentBuilder(event).action().review("Review").join_with_space())
        .msg(ContentBuilder(event).comment().join_with_newline() or None)
        .footer(_footer(event))
    )


def _compose_pull_request_review_comment(
    event: schemas.PullRequestReviewCommentEvent,
) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).pr().join_with_space() or None)
        .msg(ContentBuilder(event).action().review("Review Comment").join_with_space())
        .msg(ContentBuilder(event).comment().join_with_newline() or None)
        .footer(_footer(event))
    )


def _compose_push(event: schemas.PushEvent) -> MessageBuilder:
    return (
        MessageBuilder()
        .title(ContentBuilder(event).action().join_with_space())
        .msg(ContentBuilder(event).commit().join_with_newline())
        .footer(_footer(event))
    )


def _compose_ping(event: schemas.PingEvent) -> MessageBuilder:
    hook_id = event.hook_id if event.hook_id is not None else (event.hook.id if event.hook else None)
    title = ContentBuilder(event).push("Webhook")
    if hook_id is not None:
        title.push(f"`{hook_id}`")
    return (
        MessageBuilder()
        .title(title.push("connected").join_with_space())
        .msg(event.zen or None)
        .footer(_footer(event))
    )


COMPOSERS: dict[type, Composer] = {
    schemas.IssuesEvent: _compose_issues,
    schemas.IssueCommentEvent: _compose_issue_comment,
    schemas.PullRequestEvent: _compose_pull_request,
    schemas.PullRequestReviewEvent: _compose_pull_request_review,
    schemas.PullRequestReviewCommentEvent: _compose_pull_request_review_comment,
    schemas.PushEvent: _compose_push,
    schemas.PingEvent: _compose_ping,
}


def compose(event: schemas.Event) -> Optional[Message]:
    """
    Build the outbound message for ``event``.

    Returns ``None`` when the event carries nothing worth relaying, e.g. a
    push without commits or a ping from a hook without a repository.
    """
    composer = COMPOSERS.get(type(event))
    if composer is None:
        raise TypeError(f"no composer registered for {type(event).__name__}")
    builder = composer(event)
    if not builder.ready:
        logger.info(
            "%s produced no message (missing %s)",
            type(event).__name__,
            ", ".join(builder.missing()),
        )
        return None
    return builder.build()
