"""GitHub integration package.

Provides the async GitHubClient facade plus the engines behind it: link-header
parsing, lazy pagination, bounded polling and create-or-adopt forking.
"""

from .client import GitHubClient
from .exceptions import (
    AuthenticationRequired,
    ForkCreationFailed,
    GitHubClientError,
    NotFound,
    OAuthError,
    RetriesExhausted,
    TransportError,
)
from .forks import ForkOrchestrator
from .gate import has_credential, requires_credential
from .links import parse_link_header
from .models import AccessToken
from .pagination import Paginator
from .polling import poll_until

__all__ = [
    "AccessToken",
    "AuthenticationRequired",
    "ForkCreationFailed",
    "ForkOrchestrator",
    "GitHubClient",
    "GitHubClientError",
    "NotFound",
    "OAuthError",
    "Paginator",
    "RetriesExhausted",
    "TransportError",
    "has_credential",
    "parse_link_header",
    "poll_until",
    "requires_credential",
]
