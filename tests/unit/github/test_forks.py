"""Unit tests for create-or-adopt forking.

ForkOrchestrator is exercised against a stub client so the decision logic is
tested apart from HTTP; the HTTP-level flow is covered in test_client.py.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from forkbridge.github.exceptions import (
    ForkCreationFailed,
    NotFound,
    RetriesExhausted,
    TransportError,
)
from forkbridge.github.forks import ForkOrchestrator

FORK = {"full_name": "jdoe/foo", "fork": True}


def _not_found() -> NotFound:
    return NotFound("GitHub API error 404", status_code=404)


@pytest.fixture
def client():
    stub = Mock()
    stub.get_repo = AsyncMock()
    stub.create_fork = AsyncMock(return_value={"full_name": "jdoe/foo"})
    return stub


class TestAdoptExistingFork:
    """An existing fork is returned without a create request."""

    @pytest.mark.asyncio
    async def test_existing_fork_adopted(self, client):
        client.get_repo.return_value = FORK
        orchestrator = ForkOrchestrator(client, max_attempts=4)

        result = await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        assert result == FORK
        client.create_fork.assert_not_awaited()
        client.get_repo.assert_awaited_once_with("12345", "jdoe", "foo")

    @pytest.mark.asyncio
    async def test_repeated_calls_never_create(self, client):
        client.get_repo.return_value = FORK
        orchestrator = ForkOrchestrator(client, max_attempts=4)

        await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")
        await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        client.create_fork.assert_not_awaited()


class TestCreateFork:
    """A missing fork is created once and polled until visible."""

    @pytest.mark.asyncio
    async def test_created_then_polled(self, client):
        client.get_repo.side_effect = [_not_found(), _not_found(), _not_found(), FORK]
        orchestrator = ForkOrchestrator(client, max_attempts=4)

        result = await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        assert result == FORK
        client.create_fork.assert_awaited_once_with("12345", "upstreamUser", "foo")
        # One existence check plus three visibility probes
        assert client.get_repo.await_count == 4

    @pytest.mark.asyncio
    async def test_poll_bound_applies_after_create(self, client):
        client.get_repo.side_effect = _not_found()
        orchestrator = ForkOrchestrator(client, max_attempts=3)

        with pytest.raises(RetriesExhausted) as exc_info:
            await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        assert exc_info.value.attempts == 3
        assert client.get_repo.await_count == 1 + 3
        client.create_fork.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_failure_stops_before_polling(self, client):
        client.get_repo.side_effect = _not_found()
        client.create_fork.side_effect = ForkCreationFailed("upstreamUser/foo", 403)
        orchestrator = ForkOrchestrator(client, max_attempts=3)

        with pytest.raises(ForkCreationFailed):
            await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        assert client.get_repo.await_count == 1

    @pytest.mark.asyncio
    async def test_existence_check_error_propagates(self, client):
        client.get_repo.side_effect = TransportError("GitHub API error 500", status_code=500)
        orchestrator = ForkOrchestrator(client, max_attempts=3)

        with pytest.raises(TransportError) as exc_info:
            await orchestrator.fork("12345", "upstreamUser", "foo", "jdoe")

        assert exc_info.value.status_code == 500
        client.create_fork.assert_not_awaited()
