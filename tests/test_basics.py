"""Basic unit tests for line-web package."""

from line_web import (
    AsyncLineWeb,
    LineWeb,
    LineWebError,
    InvalidCredentials,
    InvalidParameter,
    ExpiredSession,
    ResourceNotFound,
    TransportError,
    SignOutFailed,
    UnknownError,
    ClientConfig,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert LineWeb is not None
    assert AsyncLineWeb is not None


def test_error_hierarchy():
    for cls in (InvalidCredentials, InvalidParameter, ExpiredSession, ResourceNotFound,
                TransportError, SignOutFailed, UnknownError):
        assert issubclass(cls, LineWebError)
    assert issubclass(InvalidParameter, ValueError)


def test_error_attributes():
    err = LineWebError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.status is None
    assert err.details is None

    cause = RuntimeError("boom")
    expired = ExpiredSession(status=401, cause=cause)
    assert expired.code == "expired_cookie"
    assert expired.status == 401
    assert expired.cause is cause

    assert InvalidParameter("bad", details={"field": "x"}).details == {"field": "x"}
    assert SignOutFailed().code == "logout_failure"
    assert UnknownError("Failed to fetch bots").message == "Failed to fetch bots"


def test_default_config():
    cfg = ClientConfig()
    assert cfg.base_url == "https://chat.line.biz/api"
    assert cfg.client_version == "20240513144702"
    assert cfg.cookie_domain == "line.biz"
    assert cfg.id_length == 33
    assert cfg.url("/v1/me") == "https://chat.line.biz/api/v1/me"
    assert ClientConfig(base_url="http://localhost:8080/api/").url("v1/me") == "http://localhost:8080/api/v1/me"
