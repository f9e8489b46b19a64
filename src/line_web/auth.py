"""
Cookie session. Turns an exported browser cookie dump into the Cookie header.

The dump is the JSON array produced by cookie-export browser extensions:
[{"name": "...", "value": "...", "domain": ".line.biz", ...}, ...]
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from line_web.config import DEFAULT_COOKIE_DOMAIN
from line_web.errors import InvalidCredentials


class CookieRecord(BaseModel):
    name: str
    value: str
    domain: str


_COOKIE_ARRAY = TypeAdapter(list[Any])


def parse_cookies(raw: Union[str, bytes], domain: str = DEFAULT_COOKIE_DOMAIN) -> str:
    """Return the Cookie header for all records whose domain contains `domain`.

    Elements that are not objects or have no string domain are dropped before
    anything else is read from them. Only matching records must carry string
    `name` and `value`. An empty string is returned when nothing matches; the
    server then answers with not_login.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise InvalidCredentials(
            f"Invalid cookies format. Expected JSON string. Received: {type(raw).__name__}"
        )
    try:
        entries = _COOKIE_ARRAY.validate_json(raw)
        records = [
            CookieRecord.model_validate(entry)
            for entry in entries
            if isinstance(entry, dict)
            and isinstance(entry.get("domain"), str)
            and domain in entry["domain"]
        ]
    except ValidationError as e:
        raise InvalidCredentials(cause=e) from e
    return "; ".join(f"{r.name}={r.value}" for r in records)


class Session(BaseModel):
    """Immutable cookie session. Credential updates build a new instance."""

    model_config = ConfigDict(frozen=True)

    cookie: str = ""

    @classmethod
    def from_cookies(cls, raw: Union[str, bytes], domain: str = DEFAULT_COOKIE_DOMAIN) -> Session:
        return cls(cookie=parse_cookies(raw, domain))

    def __repr__(self) -> str:
        names = [part.split("=", 1)[0] for part in self.cookie.split("; ") if part]
        return f"Session(cookies={names!r})"

    __str__ = __repr__
