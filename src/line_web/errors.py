"""
LINE chat web error types.

Every failure raised by the client is one of the classes below.
"""

from typing import Any, Optional


class LineWebError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status
        self.cause = cause
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, status={self.status!r})"


class InvalidCredentials(LineWebError):
    def __init__(self, message: str = "Invalid cookies format. Expected JSON string.",
                 cause: Optional[BaseException] = None):
        super().__init__("invalid_cookie", message, cause=cause)


class InvalidParameter(LineWebError, ValueError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_parameter", message, details=details)


class ExpiredSession(LineWebError):
    def __init__(self, message: str = "Cookies have expired or are not logged in.",
                 status: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__("expired_cookie", message, status=status, cause=cause)


class ResourceNotFound(LineWebError):
    def __init__(self, message: str = "Bot not found or not operatable.",
                 status: Optional[int] = None, cause: Optional[BaseException] = None):
        super().__init__("not_found", message, status=status, cause=cause)


class TransportError(LineWebError):
    def __init__(self, message: str, status: Optional[int] = None,
                 cause: Optional[BaseException] = None, details: Optional[dict[str, Any]] = None):
        super().__init__("http_error", message, status=status, cause=cause, details=details)


class SignOutFailed(LineWebError):
    def __init__(self, message: str = "Logout URI not found in the response"):
        super().__init__("logout_failure", message)


class UnknownError(LineWebError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__("unknown_error", message, cause=cause)
