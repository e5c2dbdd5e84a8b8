"""Error taxonomy for the GitHub integration client.

NotFound is a domain signal ("does not exist yet") for existence checks and
the poller. Everything else reaches the caller unchanged.
"""

__all__ = [
    "AuthenticationRequired",
    "ForkCreationFailed",
    "GitHubClientError",
    "NotFound",
    "OAuthError",
    "RetriesExhausted",
    "TransportError",
]


class GitHubClientError(Exception):
    """Base class for every error raised by forkbridge.github."""

    pass


class AuthenticationRequired(GitHubClientError):
    """Raised by write operations called without a credential.

    Read operations never raise this; they return None instead.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} requires a credential")


class OAuthError(GitHubClientError):
    """Raised when the access token exchange answers with an error payload."""

    def __init__(self, error: str, description: str | None = None):
        self.error = error
        self.description = description
        message = f"OAuth token exchange failed: {error}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)


class TransportError(GitHubClientError):
    """Raised when a request fails at the network layer or with a non-2xx status.

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: Response body text, or None when no response was received
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class NotFound(TransportError):
    """Raised on a 404 response."""

    pass


class ForkCreationFailed(GitHubClientError):
    """Raised when the create-fork request itself does not succeed."""

    def __init__(
        self,
        full_name: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.full_name = full_name
        self.status_code = status_code
        self.body = body
        detail = f"status {status_code}" if status_code is not None else "no response"
        super().__init__(f"Could not fork {full_name}: {detail}")


class RetriesExhausted(GitHubClientError):
    """Raised when a poll used up its attempts without a positive probe."""

    def __init__(self, attempts: int, what: str = "probe"):
        self.attempts = attempts
        self.what = what
        super().__init__(f"{what} did not succeed after {attempts} attempts")
