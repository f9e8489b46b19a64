"""Shared fixtures: cookie dumps and a mock-transport client factory."""

import json
from typing import Any, Callable

import httpx
import pytest

from line_web import AsyncLineWeb

BOT_ID = "U" + "a1B2c3D4e5" * 3 + "f6"
CHAT_ID = "C" + "0123456789" * 3 + "ab"
USER_ID = "U" + "Z" * 32

COOKIES = json.dumps([
    {"name": "ses", "value": "abc123", "domain": "chat.line.biz"},
    {"name": "XSRF-TOKEN", "value": "tok", "domain": ".line.biz"},
    {"name": "_ga", "value": "GA1.1", "domain": ".google.com"},
    {"name": "orphan", "value": "x"},
])


def json_response(status: int = 200, body: Any = None) -> httpx.Response:
    return httpx.Response(status, json=body if body is not None else {})


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests: list[httpx.Request]) -> Callable[..., AsyncLineWeb]:
    """Build an AsyncLineWeb whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> AsyncLineWeb:
        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return AsyncLineWeb(kwargs.pop("cookies", COOKIES), transport=httpx.MockTransport(recording), **kwargs)

    return factory
