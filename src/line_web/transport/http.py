"""
HTTP transport for the LINE chat web API.

HttpClient.send is the only place a request leaves the process. It injects
the browser-like default headers and the cookie session, and maps every
failure onto the error types in line_web.errors.
"""

import logging
from typing import Any, Optional

import httpx

from line_web.auth import Session
from line_web.config import ClientConfig
from line_web.errors import (
    ExpiredSession,
    LineWebError,
    ResourceNotFound,
    TransportError,
    UnknownError,
)

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "not_login"
BOT_NOT_OPERATABLE = "not_found_operatable_bot"


class HttpClient:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[dict[str, str]] = None,
        **client_options: Any,
    ):
        self._config = config or ClientConfig()
        self._headers = dict(headers or {})
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = self._build_client(client_options)
            self._owns_client = True

    def _build_client(self, options: dict[str, Any]) -> httpx.AsyncClient:
        options.setdefault("timeout", self._config.timeout)
        options.setdefault("follow_redirects", True)
        return httpx.AsyncClient(**options)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def config(self) -> ClientConfig:
        return self._config

    def set_client(self, client: httpx.AsyncClient) -> None:
        """Use a caller-owned client from now on. The caller closes it."""
        self._client = client
        self._owns_client = False

    def update_client_options(
        self,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        """Adjust the live client in place so event hooks and pools survive."""
        if timeout is not None:
            self._client.timeout = httpx.Timeout(timeout)
        if headers:
            self._headers.update(headers)

    def default_headers(self, session: Session) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "x-oa-chat-client-version": self._config.client_version,
            "Cookie": session.cookie,
            "Content-Type": "application/json",
            **self._headers,
        }

    async def send(
        self,
        method: str,
        url: str,
        failure_message: str,
        *,
        session: Session,
        json: Optional[Any] = None,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Perform one request and return the decoded body unchanged."""
        merged = {**self.default_headers(session), **(headers or {})}
        logger.debug("%s %s params=%s", method.upper(), url, params)
        try:
            resp = await self._client.request(method, url, params=params, json=json, headers=merged)
        except Exception as e:
            logger.warning("%s: %s", failure_message, e)
            raise UnknownError(failure_message, cause=e) from e

        if resp.is_error:
            error = self._classify(resp, failure_message)
            logger.warning("%s: %s", failure_message, error)
            raise error from error.cause

        try:
            return self._decode(resp)
        except ValueError as e:
            raise UnknownError(failure_message, cause=e) from e

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        content_type = resp.headers.get("content-type", "")
        try:
            return resp.json()
        except ValueError:
            if "json" in content_type:
                raise
            return resp.text

    @staticmethod
    def _body(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return None

    def _classify(self, resp: httpx.Response, failure_message: str) -> LineWebError:
        status = resp.status_code
        cause = httpx.HTTPStatusError(f"HTTP {status}", request=resp.request, response=resp)
        body = self._body(resp)
        code = body.get("code") if isinstance(body, dict) else None

        if status == 401 and code == NOT_LOGGED_IN:
            return ExpiredSession(status=status, cause=cause)
        if status == 404 and code == BOT_NOT_OPERATABLE:
            return ResourceNotFound(status=status, cause=cause)
        return TransportError(
            f"{failure_message} (HTTP {status}): {resp.text[:200]}",
            status=status,
            cause=cause,
            details={"body": body} if body is not None else None,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
