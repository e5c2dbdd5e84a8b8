"""GitHub REST API client for OAuth login, repository listing and forking.

Provides an async httpx-based facade over the GitHub endpoints the upstream
application needs. Credentials are supplied per call and forwarded verbatim as
the Authorization header; the client itself holds no user state.

Reference: https://docs.github.com/en/rest
OAuth apps: https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps
"""

import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
from tenacity import wait_fixed
from tenacity.wait import wait_base

from ..__version__ import __version__
from ..config import BridgeConfig, get_config
from ..timing import timed_operation
from ..tokens import create_random_string
from .exceptions import (
    AuthenticationRequired,
    ForkCreationFailed,
    NotFound,
    OAuthError,
    TransportError,
)
from .forks import ForkOrchestrator
from .gate import has_credential, requires_credential
from .models import AccessToken
from .pagination import Paginator
from .polling import poll_until
from .transport import json_body, send

logger = logging.getLogger("forkbridge.github.client")


class GitHubClient:
    """GitHub API client using a shared httpx.AsyncClient.

    Read operations called without a credential return None and make no
    request. Writes (forking) raise AuthenticationRequired instead.

    Attributes:
        config: BridgeConfig with OAuth app settings and endpoint URLs
        api_url: REST API base URL without trailing slash
        oauth_url: OAuth host without trailing slash

    Example:
        >>> async with GitHubClient() as client:
        ...     token = await client.get_access_token(code, state)
        ...     repos = client.get_repos(token.authorization)
        ...     async for repo in repos:
        ...         print(repo["full_name"])
    """

    # Query for the authenticated user's repositories
    REPOS_TYPE = "public"
    REPOS_SORT = "full_name"

    def __init__(
        self,
        config: BridgeConfig | None = None,
        http: httpx.AsyncClient | None = None,
        state_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Settings to use (default: get_config() singleton)
            http: Client to send requests with; one is created (and closed on
                exit) when omitted
            state_factory: Generator of OAuth state strings
                (default: create_random_string)
        """
        self.config = config or get_config()
        self.api_url = self.config.github_api_url
        self.oauth_url = self.config.github_oauth_url
        self._state_factory = state_factory or create_random_string

        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": f"forkbridge/{__version__}",
            },
            timeout=httpx.Timeout(self.config.http_timeout),
        )

        self._paginator = Paginator(self._http, self.api_url)
        self._forks = ForkOrchestrator(
            self,
            max_attempts=self.config.fork_poll_max_attempts,
            wait=self._poll_wait(),
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    def _poll_wait(self) -> wait_base | None:
        interval = self.config.fork_poll_interval_s
        return wait_fixed(interval) if interval > 0 else None

    # --- OAuth ---

    def login(self, state: str | None = None) -> dict[str, str]:
        """Build the URL that starts the OAuth authorization flow.

        Args:
            state: Anti-forgery state; a random one is generated when empty

        Returns:
            {"url": authorize URL}
        """
        state = state or self._state_factory()
        url = (
            f"{self.oauth_url}/login/oauth/authorize"
            f"?client_id={self.config.github_client_id}"
            f"&redirect_uri={self.config.github_callback_url}"
            f"&scope={self.config.github_oauth_scope}"
            f"&state={state}"
        )
        return {"url": url}

    def logout(self) -> dict[str, str]:
        """Return the URL the upstream application sends users to after logout."""
        return {"url": self.config.github_home_url}

    async def get_access_token(self, code: str, state: str) -> AccessToken:
        """Exchange an authorization code for an access token.

        Args:
            code: Code GitHub passed to the callback URL
            state: State GitHub echoed back with the code

        Returns:
            AccessToken; use its ``authorization`` property as the credential

        Raises:
            OAuthError: GitHub answered with an error payload (bad code, ...)
            TransportError: The request itself failed
        """
        response = await send(
            self._http,
            "GET",
            f"{self.oauth_url}/login/oauth/access_token",
            params={
                "client_id": self.config.github_client_id,
                "client_secret": self.config.github_client_secret.get_secret_value(),
                "code": code,
                "state": state,
            },
            headers={"accept": "application/json"},
        )
        payload = response.json()
        # GitHub reports a bad code with 200 and an ``error`` field.
        if "error" in payload:
            logger.warning("oauth_exchange_rejected", extra={"error": payload["error"]})
            raise OAuthError(payload["error"], payload.get("error_description"))
        return AccessToken.model_validate(payload)

    # --- User & repositories ---

    @requires_credential
    async def get_user_information(self, credential: str | None) -> dict[str, Any] | None:
        """Profile of the credential's owner, or None without a credential."""
        response = await send(
            self._http,
            "GET",
            f"{self.api_url}/user",
            headers={"Authorization": credential},
        )
        return response.json()

    def get_repos(
        self,
        credential: str | None,
        page: int = 1,
        per_page: int | None = None,
    ) -> AsyncIterator[dict[str, Any]] | None:
        """Lazily list the user's public repositories, sorted by full name.

        Args:
            credential: Authorization header value
            page: First page to fetch
            per_page: Page size (default: config.github_per_page)

        Returns:
            Async iterator over repository records across all remaining pages,
            or None without a credential
        """
        return self._paginator.fetch_all(
            credential,
            f"{self.api_url}/user/repos",
            {
                "type": self.REPOS_TYPE,
                "sort": self.REPOS_SORT,
                "page": page,
                "per_page": per_page or self.config.github_per_page,
            },
        )

    async def get_repo(
        self,
        credential: str | None,
        owner: str,
        repo_name: str,
    ) -> dict[str, Any]:
        """Read a single repository.

        Any 2xx answer means the repository exists. When its body is not a JSON
        object, a minimal record naming the repository is returned instead.

        Raises:
            NotFound: The repository does not exist (or is not visible)
            TransportError: Any other failure
        """
        response = await self._read_repo(credential, owner, repo_name)
        record = json_body(response)
        if not isinstance(record, dict) or not record:
            logger.debug(
                "repo_body_not_a_record",
                extra={"repo": f"{owner}/{repo_name}", "status_code": response.status_code},
            )
            return {"full_name": f"{owner}/{repo_name}"}
        return record

    async def _read_repo(
        self,
        credential: str | None,
        owner: str,
        repo_name: str,
    ) -> httpx.Response:
        headers = {"authorization": credential} if has_credential(credential) else {}
        return await send(
            self._http,
            "GET",
            f"{self.api_url}/repos/{owner}/{repo_name}",
            headers=headers,
        )

    async def repo_exists(
        self,
        owner: str,
        repo_name: str,
        credential: str | None = None,
    ) -> bool:
        """True if ``owner/repo_name`` can be read; never raises."""
        try:
            await self._read_repo(credential, owner, repo_name)
        except NotFound:
            return False
        except TransportError as e:
            logger.warning(
                "repo_exists_check_failed",
                extra={
                    "repo": f"{owner}/{repo_name}",
                    "status_code": e.status_code,
                    "error": str(e),
                },
            )
            return False
        return True

    async def wait_for_repo_to_exist(
        self,
        owner: str,
        repo_name: str,
        max_attempts: int | None = None,
        credential: str | None = None,
    ) -> dict[str, Any]:
        """Poll until ``owner/repo_name`` is readable.

        Args:
            owner: Repository owner
            repo_name: Repository name
            max_attempts: Probe budget (default: config.fork_poll_max_attempts)
            credential: Authorization header value, if any

        Returns:
            Repository record from the first successful probe

        Raises:
            RetriesExhausted: Still not found after max_attempts probes
            TransportError: A probe failed with something other than 404
        """
        return await poll_until(
            lambda: self.get_repo(credential, owner, repo_name),
            self.config.fork_poll_max_attempts if max_attempts is None else max_attempts,
            wait=self._poll_wait(),
            probe_name=f"repo {owner}/{repo_name}",
        )

    # --- Forking ---

    async def create_fork(
        self,
        credential: str | None,
        upstream_owner: str,
        repo_name: str,
    ) -> dict[str, Any]:
        """Ask GitHub to fork ``upstream_owner/repo_name`` into the caller's account.

        GitHub accepts the request before the fork is readable; see
        wait_for_repo_to_exist().

        Raises:
            AuthenticationRequired: No credential
            ForkCreationFailed: The request failed or returned non-2xx
        """
        if not has_credential(credential):
            raise AuthenticationRequired("create_fork")

        full_name = f"{upstream_owner}/{repo_name}"
        try:
            response = await send(
                self._http,
                "POST",
                f"{self.api_url}/repos/{full_name}/forks",
                headers={"authorization": credential},
            )
        except TransportError as e:
            raise ForkCreationFailed(full_name, e.status_code, e.body) from e

        accepted = json_body(response, {})
        return accepted if isinstance(accepted, dict) else {}

    async def fork_repo(
        self,
        credential: str | None,
        upstream_owner: str,
        repo_name: str,
        target_owner: str,
    ) -> dict[str, Any]:
        """Fork ``upstream_owner/repo_name`` to ``target_owner`` and wait for it.

        Calling this again for a fork that already exists returns the existing
        fork without issuing another create request.

        Raises:
            AuthenticationRequired: No credential
            ForkCreationFailed: The create request failed
            RetriesExhausted: The fork never became readable
        """
        if not has_credential(credential):
            raise AuthenticationRequired("fork_repo")

        async with timed_operation(
            "fork_repo",
            logger,
            extra={
                "upstream": f"{upstream_owner}/{repo_name}",
                "repo": f"{target_owner}/{repo_name}",
            },
        ):
            return await self._forks.fork(
                credential, upstream_owner, repo_name, target_owner
            )
