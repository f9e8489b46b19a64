"""
line-web: LINE Official Account chat web client for Python.

Cookie-authenticated async client for the chat.line.biz web API with
transparent cursor pagination.
"""

from line_web.client import LineWeb, AsyncLineWeb
from line_web.auth import Session, parse_cookies
from line_web.config import ClientConfig
from line_web.errors import (
    LineWebError,
    InvalidCredentials,
    InvalidParameter,
    ExpiredSession,
    ResourceNotFound,
    TransportError,
    SignOutFailed,
    UnknownError,
)
from line_web.models.bots import SingleBot, BotList, BotsResult

__version__ = "0.1.0"
__all__ = [
    "LineWeb",
    "AsyncLineWeb",
    "Session",
    "parse_cookies",
    "ClientConfig",
    "LineWebError",
    "InvalidCredentials",
    "InvalidParameter",
    "ExpiredSession",
    "ResourceNotFound",
    "TransportError",
    "SignOutFailed",
    "UnknownError",
    "SingleBot",
    "BotList",
    "BotsResult",
]
