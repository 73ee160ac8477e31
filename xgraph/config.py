"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic_settings import BaseSettings

# Public bearer token shipped with the X web app
DEFAULT_BEARER_TOKEN = (
    "AAAAAAAAAAAAAAAAAAAAANRILgAAAAAAnNwIzUejRCOuH5E6I8xnZz4puTs"
    "%3D1Zv7ttfk8LF81IUq16cHjhLTvJu4FA33AGWWjCpTnA"
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ProxyMode(str, Enum):
    """Proxy selection strategy."""
    ROUND_ROBIN = "round_robin"
    RANDOM = "random"
    NONE = "none"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class ClientConfig(BaseSettings):
    """Configuration for the xgraph client."""

    # Session credentials
    bearer_token: str = DEFAULT_BEARER_TOKEN
    auth_token: str | None = None
    ct0: str | None = None

    # Endpoints
    graphql_base_url: str = "https://twitter.com"
    api_base_url: str = "https://api.twitter.com"
    following_query_id: str = "iSicc7LrzWGBgDPL0tM_TQ"
    user_by_screen_name_query_id: str = "-oaLodhGbbnzJBACb1kk2Q"

    # HTTP settings
    timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    # Proxy settings
    proxy_mode: ProxyMode = ProxyMode.NONE
    proxy_urls: list[str] = []

    # Delay between pages when iterating a timeline
    request_delay_ms: int = 1000

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "XGRAPH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_session(self) -> bool:
        """True when authenticated session cookies are configured."""
        return bool(self.auth_token and self.ct0)
