"""Configuration management with pydantic-settings for forkbridge.

- Automatic .env file loading with environment variables taking precedence
- Validation with clear error messages
- SecretStr for the OAuth client secret
- Frozen config (immutable after load)

References:
- Pydantic Settings: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

import logging
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

__all__ = [
    "BridgeConfig",
    "get_config",
    "reset_config",
]


class BridgeConfig(BaseSettings):
    """Configuration for the GitHub integration client.

    Loads from (in order of precedence):
    1. Environment variables (highest priority)
    2. .env file in the working directory
    3. Default values (lowest priority)

    Attributes:
        github_client_id: OAuth application client id
        github_client_secret: OAuth application client secret
        github_callback_url: Redirect URI registered with the OAuth application
        github_home_url: Where the upstream application lands after logout
        github_oauth_url: Host serving the OAuth authorize/access_token endpoints
        github_api_url: REST API base URL
        github_oauth_scope: Space-separated scopes requested at login
        github_per_page: Default page size for repository listing
        fork_poll_max_attempts: Visibility probes before a fork is given up on
        fork_poll_interval_ms: Pause between visibility probes
        http_timeout: Per-request timeout of the default httpx client (seconds)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    # OAuth application
    github_client_id: str = Field(
        default="",
        description="OAuth application client id",
    )
    github_client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="OAuth application client secret (stored securely)",
    )
    github_callback_url: str = Field(
        default="http://localhost:3000/index.html",
        description="Redirect URI sent with the authorize request",
    )
    github_home_url: str = Field(
        default="http://localhost:3000/",
        description="URL returned by logout()",
    )
    github_oauth_scope: str = Field(
        default="repo read:user user:email",
        description="Space-separated OAuth scopes requested at login",
    )

    # Endpoints
    github_oauth_url: str = Field(
        default="https://github.com",
        description="Host for /login/oauth/authorize and /login/oauth/access_token",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL (GitHub Enterprise: https://host/api/v3)",
    )

    # Pagination
    github_per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Repositories per page requested from /user/repos (GitHub caps at 100)",
    )

    # Fork visibility polling
    fork_poll_max_attempts: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Visibility probes issued after a fork is requested",
    )
    fork_poll_interval_ms: int = Field(
        default=1000,
        ge=0,
        le=60000,
        description="Delay between visibility probes in milliseconds (0 = back to back)",
    )

    http_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout in seconds for the default httpx client",
    )

    @field_validator("github_oauth_url", "github_api_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Expected an http(s) URL, got '{v}'")
        return v.rstrip("/")

    @field_validator("github_callback_url", "github_home_url")
    @classmethod
    def validate_redirect_url(cls, v: str) -> str:
        """Require an http(s) URL; kept verbatim since it is echoed to browsers."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Expected an http(s) URL, got '{v}'")
        return v

    @property
    def fork_poll_interval_s(self) -> float:
        return self.fork_poll_interval_ms / 1000.0


@lru_cache(maxsize=1)
def get_config() -> BridgeConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return the
    cached instance.

    Raises:
        ValidationError: If configuration values are invalid.

    Example:
        >>> config = get_config()
        >>> config.github_api_url
        'https://api.github.com'
        >>> config is get_config()
        True
    """
    config = BridgeConfig()
    if not config.github_client_id:
        logger.warning(
            "GITHUB_CLIENT_ID is not set; login and token exchange will be rejected by GitHub"
        )
    return config


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
