"""Cursor loop behaviour, independent of any endpoint."""

from typing import Optional

import pytest

from line_web import TransportError, UnknownError
from line_web.pagination import BACKWARD, FORWARD, paginate

PAGES = {
    None: {"list": [1, 2], "next": "t2"},
    "t2": {"list": [3], "next": "t3"},
    "t3": {"list": [4, 5], "next": None},
}


def build_url(cursor: Optional[str]) -> str:
    return f"/items?next={cursor}" if cursor else "/items"


class FakeServer:
    def __init__(self, pages, field=FORWARD):
        self.pages = pages
        self.field = field
        self.calls: list[str] = []

    async def fetch(self, url: str):
        self.calls.append(url)
        cursor = url.split("=", 1)[1] if "=" in url else None
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page


@pytest.mark.asyncio
async def test_unbounded_follows_until_cursor_absent():
    server = FakeServer(PAGES)
    result = await paginate(server.fetch, build_url, max_pages=0)
    assert result == {"list": [1, 2, 3, 4, 5], "next": None}
    assert server.calls == ["/items", "/items?next=t2", "/items?next=t3"]


@pytest.mark.asyncio
async def test_budget_stops_and_keeps_cursor():
    server = FakeServer(PAGES)
    result = await paginate(server.fetch, build_url, max_pages=2)
    assert result == {"list": [1, 2, 3], "next": "t3"}

    rest = await paginate(server.fetch, build_url, max_pages=0, cursor=result["next"])
    assert rest == {"list": [4, 5], "next": None}


@pytest.mark.asyncio
async def test_unbounded_equals_threaded_single_pages():
    unbounded = await paginate(FakeServer(PAGES).fetch, build_url, max_pages=0)

    server = FakeServer(PAGES)
    items, cursor = [], None
    while True:
        page = await paginate(server.fetch, build_url, max_pages=1, cursor=cursor)
        items.extend(page["list"])
        cursor = page["next"]
        if not cursor:
            break
    assert items == unbounded["list"]


@pytest.mark.asyncio
async def test_budget_larger_than_available_pages():
    result = await paginate(FakeServer(PAGES).fetch, build_url, max_pages=10)
    assert result["list"] == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_backward_cursor_field():
    pages = {
        None: {"list": ["m3", "m4"], "backward": "b1"},
        "b1": {"list": ["m1", "m2"]},
    }
    server = FakeServer(pages)

    def url(cursor):
        return f"/messages?backward={cursor}" if cursor else "/messages"

    result = await paginate(server.fetch, url, cursor_field=BACKWARD, max_pages=0)
    assert result == {"list": ["m3", "m4", "m1", "m2"], "backward": None}
    assert "next" not in result


@pytest.mark.asyncio
async def test_page_without_list_contributes_nothing():
    server = FakeServer({None: {"next": "t2"}, "t2": {"list": [9]}})
    result = await paginate(server.fetch, build_url, max_pages=0)
    assert result == {"list": [9], "next": None}


@pytest.mark.asyncio
async def test_mid_loop_failure_propagates():
    server = FakeServer({**PAGES, "t2": TransportError("Failed (HTTP 500)", status=500)})
    with pytest.raises(TransportError):
        await paginate(server.fetch, build_url, max_pages=0)
    assert len(server.calls) == 2


@pytest.mark.asyncio
async def test_non_object_page_is_unknown_error():
    server = FakeServer({None: ["not", "a", "page"]})
    with pytest.raises(UnknownError):
        await paginate(server.fetch, build_url)
