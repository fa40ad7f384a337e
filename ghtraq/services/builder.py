"""Content builder: collects formatted fragments for one event."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Optional, TypeVar

from ghtraq.services import facets

E = TypeVar("E")

LIST_LIMIT = 2


def truncate_msg(items: list[str], limit: int = LIST_LIMIT) -> str:
    """
    Render a list fragment.

    Up to ``limit`` items are each prefixed with a comma (``",a,b"``).
    Longer lists keep the first two items glued together followed by the
    remainder count, e.g. ``"ab...1 mores"``.
    """
    if len(items) <= limit:
        return "".join("," + item for item in items)
    return items[0] + items[1] + f"...{len(items) - limit} mores"


class ContentBuilder(Generic[E]):
    """
    Ordered fragment accumulator bound to one decoded event.

    Facet calls either push a fragment, skip silently, or abort: aborting
    drops everything collected so far and every later call is a no-op, so
    the join methods return ``None``.
    """

    def __init__(self, event: E) -> None:
        self.event = event
        self._fragments: Optional[list[str]] = []

    @property
    def aborted(self) -> bool:
        return self._fragments is None

    def _push(self, text: str) -> None:
        if self._fragments is not None:
            self._fragments.append(text)

    def _push_or_abort(self, text: Optional[str]) -> None:
        if text is None:
            self.abort()
        else:
            self._push(text)

    def _push_some(self, text: Optional[str]) -> None:
        if text is not None:
            self._push(text)

    def abort(self) -> "ContentBuilder[E]":
        self._fragments = None
        return self

    def push(self, text: str) -> "ContentBuilder[E]":
        self._push(text)
        return self

    msg = push

    def extend(self, texts: Iterable[str]) -> "ContentBuilder[E]":
        for text in texts:
            self._push(text)
        return self

    def clean(self) -> "ContentBuilder[E]":
        if self._fragments is not None:
            self._fragments.clear()
        return self

    def group(self, build: Callable[["ContentBuilder[E]"], Optional[str]]) -> "ContentBuilder[E]":
        """Push the text ``build`` produces from a fresh builder on the same event."""
        self._push_some(build(ContentBuilder(self.event)))
        return self

    # facets

    def repo(self) -> "ContentBuilder[E]":
        found = facets.repo(self.event)
        self._push_or_abort(found.md() if found else None)
        return self

    def issue(self) -> "ContentBuilder[E]":
        found = facets.issue(self.event)
        self._push_or_abort(found.md() if found else None)
        return self

    def pr(self) -> "ContentBuilder[E]":
        found = facets.pull_request(self.event)
        self._push_some(found.md() if found else None)
        return self

    def action(self) -> "ContentBuilder[E]":
        found = facets.action(self.event)
        self._push_or_abort(found.md() if found else None)
        return self

    def assignees(self) -> "ContentBuilder[E]":
        names = [a.md() for a in facets.assignees(self.event)]
        self._push(truncate_msg(names))
        return self

    def labels(self) -> "ContentBuilder[E]":
        names = [l.md() for l in facets.labels(self.event)]
        self._push(truncate_msg(names))
        return self

    def commit(self) -> "ContentBuilder[E]":
        found = [c.md() for c in facets.commits(self.event)]
        if not found:
            self.abort()
        else:
            self.extend(found)
        return self

    def comment(self) -> "ContentBuilder[E]":
        found = facets.comment(self.event)
        self._push_some(found.md() if found else None)
        return self

    def review_url(self) -> "ContentBuilder[E]":
        found = facets.review(self.event)
        self._push_some(found.url if found else None)
        return self

    def review(self, title: str = "Review Comment") -> "ContentBuilder[E]":
        found = facets.review(self.event)
        self._push_some(found.md(title) if found else None)
        return self

    # finalizers

    def fragments(self) -> Optional[list[str]]:
        return None if self._fragments is None else list(self._fragments)

    def join(self, separator: str) -> Optional[str]:
        if self._fragments is None:
            return None
        return separator.join(self._fragments)

    def join_with_space(self) -> Optional[str]:
        return self.join(" ")

    def join_no_separator(self) -> Optional[str]:
        return self.join("")

    def join_with_newline(self) -> Optional[str]:
        return self.join("\n")
