"""Message composer."""

from __future__ import annotations

import pytest

from ghtraq.errors import MissingFieldError
from ghtraq.services.facets import Repository
from ghtraq.services.message import Message, MessageBuilder


class TestMessageBuilder:
    def test_build_renders_sections_in_order(self) -> None:
        message = (
            MessageBuilder()
            .footer("[acme/widget](https://x)")
            .msg("first")
            .title("Hello")
            .msgs(["second", "third"])
            .build()
        )
        assert isinstance(message, Message)
        assert str(message) == (
            "### Hello\n---\nfirst\nsecond\nthird\n##### [acme/widget](https://x)\n"
        )

    def test_empty_body(self) -> None:
        message = MessageBuilder().title("T").footer("F").build()
        assert message.text == "### T\n---\n##### F\n"

    def test_repo_footer(self) -> None:
        repo = Repository(owner="acme", name="widget", url="https://x")
        message = MessageBuilder().title("T").repo(repo).build()
        assert message.text.endswith("##### [acme/widget](https://x)\n")

    def test_none_msg_is_skipped(self) -> None:
        message = MessageBuilder().title("T").msg(None).msg("b").footer("F").build()
        assert message.text == "### T\n---\nb\n##### F\n"

    @pytest.mark.parametrize(
        ("builder", "missing"),
        [
            (MessageBuilder(), ("title", "footer")),
            (MessageBuilder().title("T"), ("footer",)),
            (MessageBuilder().footer("F"), ("title",)),
            (MessageBuilder().title(None).footer("F"), ("title",)),
            (MessageBuilder().title("T").repo(None), ("footer",)),
        ],
    )
    def test_missing_fields(self, builder: MessageBuilder, missing: tuple[str, ...]) -> None:
        assert not builder.ready
        with pytest.raises(MissingFieldError) as excinfo:
            builder.build()
        assert excinfo.value.fields == missing

    def test_body_line_endings_are_normalised(self) -> None:
        message = (
            MessageBuilder()
            .title("T")
            .msg("one\r\ntwo\rthree")
            .msgs(["four\r\n"])
            .footer("F")
            .build()
        )
        assert "\r" not in message.text
        assert message.text == "### T\n---\none\ntwo\nthree\nfour\n\n##### F\n"
