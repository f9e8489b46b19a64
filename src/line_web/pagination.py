"""
Cursor pagination shared by every list endpoint.

Bots, chats, contacts and members hand out a forward cursor in `next`;
messages hand out an "older than" cursor in `backward`. Both are threaded
back unchanged as the query parameter of the same name.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from line_web.errors import UnknownError

logger = logging.getLogger(__name__)

FORWARD = "next"
BACKWARD = "backward"

FetchPage = Callable[[str], Awaitable[Any]]
BuildUrl = Callable[[Optional[str]], str]


async def paginate(
    fetch: FetchPage,
    build_url: BuildUrl,
    *,
    cursor_field: str = FORWARD,
    max_pages: int = 1,
    cursor: Optional[str] = None,
) -> dict[str, Any]:
    """Fetch pages until the server stops handing out cursors or the budget runs out.

    `max_pages=0` means no budget. The returned dict holds every item in
    arrival order under "list" and the last cursor seen under `cursor_field`,
    which is still set when the budget stopped the loop so a later call can
    resume from there. Any page failure propagates and the partial result
    is dropped.
    """
    items: list[Any] = []
    page_count = 0

    while True:
        data = await fetch(build_url(cursor))
        page = data or {}
        if not isinstance(page, dict):
            raise UnknownError(f"Unexpected page type: {type(page).__name__}")
        items.extend(page.get("list") or [])
        cursor = page.get(cursor_field)
        page_count += 1

        if max_pages > 0 and page_count >= max_pages:
            break
        if not cursor:
            break

    logger.debug("fetched %d page(s), %d item(s), more=%s", page_count, len(items), bool(cursor))
    return {"list": items, cursor_field: cursor}
