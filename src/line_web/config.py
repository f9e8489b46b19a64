"""
Client configuration.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://chat.line.biz/api"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36"
)
DEFAULT_CLIENT_VERSION = "20240513144702"
DEFAULT_COOKIE_DOMAIN = "line.biz"
WEB_ID_LENGTH = 33


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    client_version: str = DEFAULT_CLIENT_VERSION
    cookie_domain: str = DEFAULT_COOKIE_DOMAIN
    timeout: float = Field(default=30.0, gt=0)
    id_length: int = Field(default=WEB_ID_LENGTH, gt=0)

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
