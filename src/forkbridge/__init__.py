"""forkbridge - GitHub integration client.

Provides, for an upstream web application:
- OAuth authorization code exchange
- Lazy listing of a user's repositories across Link-header pagination
- Idempotent forking with bounded polling until the fork is readable

Python Version: 3.10+ required
"""

# Logging first so module loggers pick up the forkbridge handler.
from .logging_config import StructuredFormatter, configure_logging

configure_logging()

from .__version__ import __version__
from .config import BridgeConfig, get_config, reset_config
from .github import (
    AccessToken,
    AuthenticationRequired,
    ForkCreationFailed,
    GitHubClient,
    GitHubClientError,
    NotFound,
    OAuthError,
    RetriesExhausted,
    TransportError,
)
from .timing import timed_operation
from .tokens import create_random_string

__all__ = [
    "AccessToken",
    "AuthenticationRequired",
    "BridgeConfig",
    "ForkCreationFailed",
    "GitHubClient",
    "GitHubClientError",
    "NotFound",
    "OAuthError",
    "RetriesExhausted",
    "StructuredFormatter",
    "TransportError",
    "__version__",
    "configure_logging",
    "create_random_string",
    "get_config",
    "reset_config",
    "timed_operation",
]
