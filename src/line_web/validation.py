"""
Parameter validation. Runs before any request is built.

Each check skips None (absent optional parameter) and otherwise applies, in
order: type, non-empty, exact length, character class, numeric range. The
first violated rule raises InvalidParameter.
"""

import re
from typing import Any, Callable, Iterable, NoReturn, Optional

from line_web.config import WEB_ID_LENGTH
from line_web.errors import InvalidParameter

ALNUM = re.compile(r"^[a-zA-Z0-9]+$")
DIGITS = re.compile(r"^[0-9]+$")
UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
UUID_LENGTH = 36


def _fail(field: str, message: str, value: Any) -> NoReturn:
    raise InvalidParameter(message, details={"field": field, "received": value})


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_string(
    field: str,
    value: Any,
    *,
    length: Optional[int] = None,
    pattern: Optional[re.Pattern[str]] = None,
    pattern_desc: str = "",
) -> None:
    if not isinstance(value, str):
        _fail(field, f"Invalid {field} type (must be a string). Received: {type(value).__name__}", value)
    if value.strip() == "":
        _fail(field, f"{field} cannot be an empty string.", value)
    if length is not None and len(value) != length:
        _fail(field, f"Invalid {field} length (must be {length} characters). Received: {len(value)}", value)
    if pattern is not None and not pattern.fullmatch(value):
        _fail(field, f"{field} must contain only {pattern_desc}. Received: {value!r}", value)


def check_required(field: str, value: Any) -> None:
    if value is None:
        _fail(field, f"{field} is required.", value)


def check_text(field: str, value: Any) -> None:
    """Free text such as a search query. May be empty."""
    if value is None:
        return
    if not isinstance(value, str):
        _fail(field, f"Invalid {field} type (must be a string). Received: {type(value).__name__}", value)


def check_token(field: str, value: Any) -> None:
    """Opaque pagination cursor."""
    if value is None:
        return
    _check_string(field, value)


def check_web_id(field: str, value: Any, length: int = WEB_ID_LENGTH) -> None:
    """Bot, chat and user ids: fixed-length alphanumeric."""
    if value is None:
        return
    _check_string(field, value, length=length, pattern=ALNUM, pattern_desc="a-z, A-Z, 0-9 characters")


def check_alnum(field: str, value: Any) -> None:
    if value is None:
        return
    _check_string(field, value, pattern=ALNUM, pattern_desc="a-z, A-Z, 0-9 characters")


def check_digits(field: str, value: Any) -> None:
    if value is None:
        return
    _check_string(field, value, pattern=DIGITS, pattern_desc="digits (0-9)")


def check_uuid(field: str, value: Any) -> None:
    if value is None:
        return
    _check_string(
        field, value, length=UUID_LENGTH, pattern=UUID,
        pattern_desc="a valid UUID (hex digits in 8-4-4-4-12 groups)",
    )


def check_limit(field: str, value: Any, low: int, high: int) -> None:
    if value is None:
        return
    if not _is_int(value):
        _fail(field, f"Invalid {field} type (must be an integer). Received: {type(value).__name__}", value)
    if value < low or value > high:
        _fail(field, f"Invalid {field} value (must be between {low} and {high}). Received: {value}", value)


def check_max_pages(field: str, value: Any) -> None:
    """Page budget: non-negative integer, 0 means no limit."""
    if value is None:
        return
    if not _is_int(value):
        _fail(field, f"Invalid {field} type (must be an integer >= 0). Received: {type(value).__name__}", value)
    if value < 0:
        _fail(field, f"Invalid {field} value (must be a non-negative integer). Received: {value}", value)


def check_choice(field: str, value: Any, choices: Iterable[str]) -> None:
    if value is None:
        return
    allowed = tuple(choices)
    if not isinstance(value, str) or value not in allowed:
        _fail(field, f"Invalid {field} value (must be one of {', '.join(allowed)}). Received: {value!r}", value)


def check_id_list(field: str, item_field: str, values: Any, check: Callable[[str, Any], None]) -> None:
    """Apply the scalar `check` to every element, reported under `item_field`."""
    if values is None:
        return
    if not isinstance(values, (list, tuple)):
        _fail(field, f"Invalid {field} type (must be a list of strings). Received: {type(values).__name__}", values)
    for item in values:
        if item is None:
            _fail(item_field, f"Invalid {item_field} type (must be a string). Received: NoneType", item)
        check(item_field, item)
