"""Outbound delivery to traQ."""

from __future__ import annotations

import httpx
import pytest
from pytest_httpx import HTTPXMock

from conftest import TRAQ_URL
from ghtraq.errors import DeliveryFailure
from ghtraq.services.traq import SIGNATURE_HEADER, post_message
from ghtraq.utils import traq_signature

SECRET = b"traq-secret"
MESSAGE = "### Hello\n---\n##### [acme/widget](https://x)\n"


@pytest.mark.anyio
class TestPostMessage:
    async def test_posts_signed_plain_text(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=TRAQ_URL, method="POST", status_code=204)

        resp = await post_message(MESSAGE, SECRET, TRAQ_URL)

        assert resp.status_code == 204
        request = httpx_mock.get_request()
        assert request.content == MESSAGE.encode("utf-8")
        assert request.headers["content-type"] == "text/plain; charset=utf-8"
        assert request.headers[SIGNATURE_HEADER] == traq_signature(SECRET, MESSAGE)

    async def test_non_success_status_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=TRAQ_URL, method="POST", status_code=400, text="bad")

        with pytest.raises(DeliveryFailure) as excinfo:
            await post_message(MESSAGE, SECRET, TRAQ_URL)
        assert excinfo.value.status_code == 400
        assert len(httpx_mock.get_requests()) == 1

    async def test_transport_error_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("boom"), url=TRAQ_URL)

        with pytest.raises(DeliveryFailure, match="transport"):
            await post_message(MESSAGE, SECRET, TRAQ_URL)
