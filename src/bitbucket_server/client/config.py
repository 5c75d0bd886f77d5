import enum

from pydantic import SecretStr
from pydantic_settings import BaseSettings

DEFAULT_API_VERSION = "1.0"


class OutputFormat(str, enum.Enum):
    JSON = "json"
    TEXT = "text"


class Settings(BaseSettings):
    bitbucket_endpoint: str | None = None
    bitbucket_api_version: str = DEFAULT_API_VERSION
    bitbucket_token: SecretStr | None = None
    bitbucket_username: str | None = None
    bitbucket_password: SecretStr | None = None
    log_level: str = "INFO"
    http_timeout_total: float = 300
    http_timeout_connect: float = 30
    http_timeout_sock_read: float = 120
    ssl_verify: bool = True
    user_agent: str = "bitbucket-server-files"


settings = Settings()
