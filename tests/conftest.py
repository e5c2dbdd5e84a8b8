"""Shared pytest fixtures for forkbridge tests.

Fixture Organization:
    - Configuration fixtures: BridgeConfig instances isolated from the host env
    - Client fixtures: GitHubClient wired to a real httpx.AsyncClient whose
      ``request`` method tests patch with AsyncMock
    - Response factories: Mock(spec=httpx.Response) builders

References:
    - pytest fixtures docs: https://docs.pytest.org/en/stable/how-to/fixtures.html
"""

import json
from collections.abc import Callable, Iterator
from unittest.mock import Mock

import httpx
import pytest
import pytest_asyncio

from forkbridge.config import BridgeConfig, reset_config
from forkbridge.github.client import GitHubClient

REPO_RECORD = {
    "name": "foo",
    "full_name": "jdoe/foo",
    "private": False,
    "owner": {"login": "jdoe", "type": "User", "site_admin": False},
    "html_url": "https://github.com/jdoe/foo",
    "description": None,
    "fork": False,
    "url": "https://api.github.com/repos/jdoe/foo",
    "size": 11195,
    "default_branch": "master",
}


def _mock_response(
    status_code: int = 200,
    json_data: dict | list | None = None,
    headers: dict | None = None,
    content: bytes | None = None,
) -> Mock:
    """Create a mock httpx.Response with given attributes."""
    resp = Mock(spec=httpx.Response)
    resp.status_code = status_code
    resp.json.return_value = json_data if json_data is not None else {}
    if content is None:
        content = json.dumps(json_data).encode() if json_data is not None else b""
    resp.content = content
    resp.text = content.decode()
    resp.headers = httpx.Headers(headers or {})
    return resp


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for mock httpx responses (status, json_data, headers, content)."""
    return _mock_response


@pytest.fixture
def repo_record() -> dict:
    """A repository record as returned by GET /repos/{owner}/{repo}."""
    return dict(REPO_RECORD)


@pytest.fixture(autouse=True)
def clean_config_cache() -> Iterator[None]:
    """Clear the get_config() singleton around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def bridge_config() -> BridgeConfig:
    """Deterministic configuration with zero polling delay."""
    return BridgeConfig(
        _env_file=None,
        github_client_id="abcxyz",
        github_client_secret="secret",
        github_callback_url="http://localhost:3000/index.html",
        github_home_url="http://localhost:3000/",
        github_oauth_url="https://github.com",
        github_api_url="https://api.github.com",
        fork_poll_max_attempts=4,
        fork_poll_interval_ms=0,
    )


@pytest_asyncio.fixture
async def github_client(bridge_config: BridgeConfig):
    """GitHubClient with a fixed OAuth state and its own httpx client."""
    client = GitHubClient(
        config=bridge_config,
        state_factory=lambda: "9876543210",
    )
    yield client
    await client.close()
