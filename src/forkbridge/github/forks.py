"""Create-or-adopt forking with bounded visibility polling.

GitHub answers a fork request before the fork can be read back, so a created
fork is polled until ``GET /repos/{owner}/{repo}`` succeeds. An existing fork
under the target owner is adopted instead of requesting a duplicate.
"""

import logging
from typing import TYPE_CHECKING, Any

from tenacity.wait import wait_base

from .exceptions import NotFound
from .polling import poll_until

if TYPE_CHECKING:
    from .client import GitHubClient

logger = logging.getLogger("forkbridge.github.forks")


class ForkOrchestrator:
    """Fork a repository into a target account exactly once.

    Attributes:
        client: GitHubClient providing get_repo() and create_fork()
        max_attempts: Visibility probes issued after a create request
        wait: Tenacity wait strategy between probes (None = back to back)
    """

    def __init__(
        self,
        client: "GitHubClient",
        max_attempts: int,
        wait: wait_base | None = None,
    ) -> None:
        self.client = client
        self.max_attempts = max_attempts
        self.wait = wait

    async def fork(
        self,
        credential: str,
        upstream_owner: str,
        repo_name: str,
        target_owner: str,
    ) -> dict[str, Any]:
        """Return the fork record, creating the fork if it does not exist yet.

        Args:
            credential: Authorization header value
            upstream_owner: Owner of the repository being forked
            repo_name: Repository name (same for upstream and fork)
            target_owner: Account the fork lives under

        Returns:
            Repository record of the fork, as read from the API

        Raises:
            ForkCreationFailed: The create request failed
            RetriesExhausted: The fork never became readable
            TransportError: The initial existence check failed for a reason
                other than 404
        """
        target = f"{target_owner}/{repo_name}"

        try:
            existing = await self.client.get_repo(credential, target_owner, repo_name)
        except NotFound:
            existing = None

        if existing is not None:
            logger.info("fork_adopted", extra={"repo": target})
            return existing

        await self.client.create_fork(credential, upstream_owner, repo_name)
        logger.info(
            "fork_requested",
            extra={"upstream": f"{upstream_owner}/{repo_name}", "repo": target},
        )

        return await poll_until(
            lambda: self.client.get_repo(credential, target_owner, repo_name),
            self.max_attempts,
            wait=self.wait,
            probe_name=f"fork {target}",
        )
