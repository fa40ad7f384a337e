"""Message composer: title + body lines + footer, rendered as markdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ghtraq.errors import MissingFieldError
from ghtraq.services.facets import Repository

TITLE_MARK = "###"
SEPARATOR = "---"
FOOTER_MARK = "#####"


def _normalize_newlines(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class Message:
    text: str

    def __str__(self) -> str:
        return self.text


class MessageBuilder:
    """
    Staged message builder.

    ``title`` and ``footer`` (or ``repo``) must both be supplied before
    :meth:`build`; body lines are optional. ``None`` arguments are accepted
    and leave the field unset, so a missing facet upstream surfaces as a
    :class:`MissingFieldError` here instead of a half-rendered message.
    """

    def __init__(self) -> None:
        self._title: Optional[str] = None
        self._footer: Optional[str] = None
        self._lines: list[str] = []

    def title(self, text: Optional[str]) -> "MessageBuilder":
        self._title = None if text is None else _normalize_newlines(text)
        return self

    def footer(self, text: Optional[str]) -> "MessageBuilder":
        self._footer = text
        return self

    def repo(self, repository: Optional[Repository]) -> "MessageBuilder":
        return self.footer(repository.md() if repository else None)

    def msg(self, text: Optional[str]) -> "MessageBuilder":
        if text is not None:
            self._lines.append(_normalize_newlines(text))
        return self

    def msgs(self, texts: Iterable[str]) -> "MessageBuilder":
        self._lines.extend(_normalize_newlines(t) for t in texts)
        return self

    def missing(self) -> tuple[str, ...]:
        return tuple(
            name
            for name, value in (("title", self._title), ("footer", self._footer))
            if value is None
        )

    @property
    def ready(self) -> bool:
        return not self.missing()

    def build(self) -> Message:
        missing = self.missing()
        if missing:
            raise MissingFieldError(*missing)

        lines = [f"{TITLE_MARK} {self._title}", SEPARATOR]
        lines.extend(self._lines)
        lines.append(f"{FOOTER_MARK} {self._footer}")
        return Message("\n".join(lines) + "\n")
