"""
LineWeb / AsyncLineWeb: LINE Official Account chat web clients.
"""

import asyncio
import logging
from typing import Any, Optional, Union

import httpx

from line_web.auth import Session
from line_web.config import ClientConfig
from line_web.errors import InvalidParameter, SignOutFailed
from line_web.models.bots import BotList, BotsResult, SingleBot
from line_web.pagination import BACKWARD, FORWARD, paginate
from line_web.transport.http import HttpClient
from line_web.validation import (
    check_alnum,
    check_choice,
    check_digits,
    check_id_list,
    check_limit,
    check_max_pages,
    check_required,
    check_text,
    check_token,
    check_uuid,
    check_web_id,
)

logger = logging.getLogger(__name__)

BOTS_LIMIT = (1, 1000)
CHATS_LIMIT = (1, 25)
CONTACTS_LIMIT = (1, 100)
MEMBERS_LIMIT = (1, 100)

FILTER_KEYS = ("ALL", "FRIEND", "NOT_FRIEND", "GROUP", "SPAM")
SORT_KEYS = ("DISPLAY_NAME", "LAST_TALKED_AT")
SORT_ORDERS = ("ASC", "DESC")


class AsyncLineWeb:
    """Async LINE chat web client (primary).

    `cookies` is the JSON cookie export of a logged-in chat.line.biz browser
    session. Pass `client` to reuse your own httpx.AsyncClient; any other
    keyword arguments are forwarded to the internally created one.
    """

    def __init__(
        self,
        cookies: Union[str, bytes],
        *,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[dict[str, str]] = None,
        **client_options: Any,
    ):
        self._config = config or ClientConfig()
        self._session = Session.from_cookies(cookies, self._config.cookie_domain)
        self.http = HttpClient(self._config, client=client, headers=headers, **client_options)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> Session:
        return self._session

    @property
    def cookies(self) -> str:
        return self._session.cookie

    def set_cookies(self, cookies: Union[str, bytes]) -> None:
        """Replace the session. Requests already in flight keep the old one."""
        self._session = Session.from_cookies(cookies, self._config.cookie_domain)

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        self.http.set_client(client)

    def update_client_options(self, timeout: Optional[float] = None,
                              headers: Optional[dict[str, str]] = None) -> None:
        self.http.update_client_options(timeout=timeout, headers=headers)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncLineWeb":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _url(self, path: str, **params: Optional[str]) -> str:
        query = {k: v for k, v in params.items() if v is not None}
        return str(httpx.URL(self._config.url(path), params=query))

    def _check_id(self, field: str, value: Any, required: bool = True) -> None:
        if required:
            check_required(field, value)
        check_web_id(field, value, self._config.id_length)

    def _check_user_id(self, field: str, value: Any) -> None:
        check_web_id(field, value, self._config.id_length)

    # Defaulted parameters: an explicit None is rejected, never skipped.
    def _check_limit(self, value: Any, bounds: tuple[int, int]) -> None:
        check_required("limit_per_page", value)
        check_limit("limit_per_page", value, *bounds)

    def _check_max_pages(self, value: Any) -> None:
        check_required("max_pages", value)
        check_max_pages("max_pages", value)

    def _check_choice(self, field: str, value: Any, choices: tuple[str, ...]) -> None:
        check_required(field, value)
        check_choice(field, value, choices)

    async def _get(self, url: str, failure_message: str, session: Session) -> Any:
        return await self.http.send("GET", url, failure_message, session=session)

    async def _paginate(self, build_url: Any, failure_message: str, *, cursor_field: str,
                        max_pages: int, cursor: Optional[str]) -> dict[str, Any]:
        session = self._session

        async def fetch(url: str) -> Any:
            return await self._get(url, failure_message, session)

        return await paginate(fetch, build_url, cursor_field=cursor_field,
                              max_pages=max_pages, cursor=cursor)

    async def get_me(self) -> dict[str, Any]:
        """Profile of the logged-in account."""
        return await self._get(self._config.url("v1/me"), "Failed to fetch user profile", self._session)

    async def get_bots(
        self,
        *,
        limit_per_page: int = 1000,
        max_pages: int = 1,
        next_token: Optional[str] = None,
        web_bot_id: Optional[str] = None,
    ) -> BotsResult:
        """List the accounts (bots) the user can operate, or fetch one by id.

        Returns SingleBot when `web_bot_id` is given, BotList otherwise.
        """
        self._check_limit(limit_per_page, BOTS_LIMIT)
        self._check_max_pages(max_pages)
        check_token("next_token", next_token)
        self._check_id("web_bot_id", web_bot_id, required=False)

        if web_bot_id:
            if next_token:
                raise InvalidParameter(
                    "next_token is not supported when web_bot_id is provided.",
                    details={"field": "next_token", "received": next_token},
                )
            bot = await self._get(self._url(f"v1/bots/{web_bot_id}", noFilter="true"),
                                  "Failed to fetch bot", self._session)
            return SingleBot(bot=bot)

        def build_url(next_: Optional[str]) -> str:
            return self._url("v1/bots", noFilter="true", limit=str(limit_per_page), next=next_ or None)

        page = await self._paginate(build_url, "Failed to fetch bots", cursor_field=FORWARD,
                                    max_pages=max_pages, cursor=next_token)
        return BotList(bots=page["list"], next=page[FORWARD])

    async def get_owners(self, web_bot_id: str, *, biz_ids: Optional[list[str]] = None) -> dict[str, Any]:
        """Business owners of a bot, optionally restricted to `biz_ids`."""
        self._check_id("web_bot_id", web_bot_id)
        check_id_list("biz_ids", "biz_id", biz_ids, check_uuid)

        url = self._url(f"v1/bots/{web_bot_id}/owners",
                        bizIds=",".join(biz_ids) if biz_ids is not None else None)
        return await self._get(url, "Failed to fetch owners", self._session)

    async def get_tags(self, web_bot_id: str, *, tag_ids: Optional[list[str]] = None) -> dict[str, Any]:
        self._check_id("web_bot_id", web_bot_id)
        check_id_list("tag_ids", "tag_id", tag_ids, check_alnum)

        url = self._url(f"v1/bots/{web_bot_id}/tags",
                        tagIds=",".join(tag_ids) if tag_ids is not None else None)
        return await self._get(url, "Failed to fetch tags", self._session)

    async def get_chats(
        self,
        web_bot_id: str,
        *,
        limit_per_page: int = 25,
        max_pages: int = 1,
        next_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Chats of a bot, newest first, pinned chats on top.

        `max_pages=0` follows `next` until the server stops returning one;
        otherwise at most `max_pages` pages are fetched and the returned
        `next` resumes after them.
        """
        self._check_id("web_bot_id", web_bot_id)
        self._check_limit(limit_per_page, CHATS_LIMIT)
        self._check_max_pages(max_pages)
        check_token("next_token", next_token)

        def build_url(next_: Optional[str]) -> str:
            return self._url(
                f"v2/bots/{web_bot_id}/chats",
                folderType="ALL",
                tagIds="",
                autoTagIds="",
                limit=str(limit_per_page),
                prioritizePinnedChat="true",
                next=next_ or None,
            )

        return await self._paginate(build_url, "Failed to fetch chats", cursor_field=FORWARD,
                                    max_pages=max_pages, cursor=next_token)

    async def get_messages(
        self,
        web_bot_id: str,
        web_chat_id: str,
        *,
        max_pages: int = 1,
        backward_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Messages of a chat, walking back in time through `backward` cursors."""
        self._check_id("web_bot_id", web_bot_id)
        self._check_id("web_chat_id", web_chat_id)
        self._check_max_pages(max_pages)
        check_token("backward_token", backward_token)

        def build_url(backward: Optional[str]) -> str:
            return self._url(f"v3/bots/{web_bot_id}/chats/{web_chat_id}/messages",
                             backward=backward or None)

        return await self._paginate(build_url, "Failed to fetch messages", cursor_field=BACKWARD,
                                    max_pages=max_pages, cursor=backward_token)

    async def get_contact_by_name(
        self,
        web_bot_id: str,
        chat_name: str,
        *,
        limit_per_page: int = 20,
        max_pages: int = 1,
        next_token: Optional[str] = None,
        filter_key: str = "ALL",
        sort_key: str = "DISPLAY_NAME",
        sort_order: str = "ASC",
    ) -> dict[str, Any]:
        """Search the contact list of a bot by display name."""
        self._check_id("web_bot_id", web_bot_id)
        check_required("chat_name", chat_name)
        check_text("chat_name", chat_name)
        self._check_limit(limit_per_page, CONTACTS_LIMIT)
        self._check_max_pages(max_pages)
        check_token("next_token", next_token)
        self._check_choice("filter_key", filter_key, FILTER_KEYS)
        self._check_choice("sort_key", sort_key, SORT_KEYS)
        self._check_choice("sort_order", sort_order, SORT_ORDERS)

        def build_url(next_: Optional[str]) -> str:
            return self._url(
                f"v2/bots/{web_bot_id}/contacts",
                query=chat_name,
                sortKey=sort_key,
                sortOrder=sort_order,
                filterKey=filter_key,
                limit=str(limit_per_page),
                next=next_ or None,
            )

        return await self._paginate(build_url, "Failed to fetch contacts", cursor_field=FORWARD,
                                    max_pages=max_pages, cursor=next_token)

    async def get_chat_members(
        self,
        web_bot_id: str,
        web_chat_id: str,
        *,
        limit_per_page: int = 100,
        web_user_ids: Optional[list[str]] = None,
        next_token: Optional[str] = None,
        max_pages: int = 1,
    ) -> dict[str, Any]:
        """Members of a group chat, optionally restricted to `web_user_ids`."""
        self._check_id("web_bot_id", web_bot_id)
        self._check_id("web_chat_id", web_chat_id)
        self._check_limit(limit_per_page, MEMBERS_LIMIT)
        check_id_list("web_user_ids", "web_user_id", web_user_ids, self._check_user_id)
        check_token("next_token", next_token)
        self._check_max_pages(max_pages)

        user_ids = ",".join(web_user_ids) if web_user_ids is not None else None

        def build_url(next_: Optional[str]) -> str:
            return self._url(
                f"v1/bots/{web_bot_id}/chats/{web_chat_id}/members",
                limit=str(limit_per_page),
                userIds=user_ids,
                next=next_ or None,
            )

        return await self._paginate(build_url, "Failed to fetch chat members", cursor_field=FORWARD,
                                    max_pages=max_pages, cursor=next_token)

    async def get_flex_message_content(
        self,
        web_bot_id: str,
        web_chat_id: str,
        message_id: str,
        *,
        timestamp: Optional[str] = None,
    ) -> dict[str, Any]:
        """Flex container JSON of a flex message."""
        self._check_id("web_bot_id", web_bot_id)
        self._check_id("web_chat_id", web_chat_id)
        check_required("message_id", message_id)
        check_digits("message_id", message_id)
        check_digits("timestamp", timestamp)

        url = self._url(f"v1/bots/{web_bot_id}/chats/{web_chat_id}/messages/flexJson",
                        messageId=message_id, timestamp=timestamp)
        return await self._get(url, "Failed to fetch flex message content", self._session)

    async def logout(self) -> None:
        """Sign out: ask the API for the logout URI, then visit it."""
        session = self._session
        res = await self.http.send(
            "POST", self._config.url("v1/logoutUri"), "Failed to logout",
            session=session, json={"redirectPath": "/"},
        )
        logout_uri = res.get("logoutUri") if isinstance(res, dict) else None
        if not logout_uri:
            raise SignOutFailed()
        await self.http.send("GET", logout_uri, "Failed to logout", session=session)
        logger.info("logged out")


class LineWeb:
    """Sync wrapper around AsyncLineWeb. Runs the event loop internally."""

    def __init__(self, cookies: Union[str, bytes], **kwargs: Any):
        self._async = AsyncLineWeb(cookies, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> ClientConfig:
        return self._async.config

    @property
    def cookies(self) -> str:
        return self._async.cookies

    @property
    def session(self) -> Session:
        return self._async.session

    def set_cookies(self, cookies: Union[str, bytes]) -> None:
        self._async.set_cookies(cookies)

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        self._async.set_http_client(client)

    def update_client_options(self, **kwargs: Any) -> None:
        self._async.update_client_options(**kwargs)

    def get_me(self) -> dict[str, Any]:
        return self._run(self._async.get_me())

    def get_bots(self, **kwargs: Any) -> BotsResult:
        return self._run(self._async.get_bots(**kwargs))

    def get_owners(self, web_bot_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_owners(web_bot_id, **kwargs))

    def get_tags(self, web_bot_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_tags(web_bot_id, **kwargs))

    def get_chats(self, web_bot_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_chats(web_bot_id, **kwargs))

    def get_messages(self, web_bot_id: str, web_chat_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_messages(web_bot_id, web_chat_id, **kwargs))

    def get_contact_by_name(self, web_bot_id: str, chat_name: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_contact_by_name(web_bot_id, chat_name, **kwargs))

    def get_chat_members(self, web_bot_id: str, web_chat_id: str, **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_chat_members(web_bot_id, web_chat_id, **kwargs))

    def get_flex_message_content(self, web_bot_id: str, web_chat_id: str, message_id: str,
                                 **kwargs: Any) -> dict[str, Any]:
        return self._run(self._async.get_flex_message_content(web_bot_id, web_chat_id, message_id, **kwargs))

    def logout(self) -> None:
        self._run(self._async.logout())

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "LineWeb":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
