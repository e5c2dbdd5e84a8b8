"""Bounded polling for resources that GitHub materializes asynchronously.

A probe is awaited up to ``max_attempts`` times. A truthy result ends the poll;
a falsy result or NotFound means "not yet". Any other error is fatal and
propagates from the attempt that raised it.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_none,
)
from tenacity.wait import wait_base

from .exceptions import NotFound, RetriesExhausted

logger = logging.getLogger("forkbridge.github.polling")

T = TypeVar("T")


def _not_ready(result: Any) -> bool:
    return not result


async def poll_until(
    probe: Callable[[], Awaitable[T]],
    max_attempts: int,
    wait: wait_base | None = None,
    probe_name: str = "probe",
) -> T:
    """Await ``probe`` until it reports success or attempts run out.

    Args:
        probe: Zero-argument coroutine function
        max_attempts: Attempts allowed, at least 1
        wait: Tenacity wait strategy between attempts (default: none)
        probe_name: Label used in logs and in RetriesExhausted

    Returns:
        The first truthy probe result

    Raises:
        ValueError: If max_attempts < 1
        RetriesExhausted: After max_attempts unsuccessful attempts
        Exception: Whatever the probe raised, other than NotFound
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    attempts = 0

    async def attempt() -> T:
        nonlocal attempts
        attempts += 1
        return await probe()

    def log_not_ready(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        logger.debug(
            "probe_not_ready",
            extra={
                "probe": probe_name,
                "attempt": retry_state.attempt_number,
                "max_attempts": max_attempts,
                "outcome": "not_found" if outcome and outcome.failed else "negative",
            },
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait if wait is not None else wait_none(),
        retry=retry_if_exception_type(NotFound) | retry_if_result(_not_ready),
        before_sleep=log_not_ready,
        reraise=False,
    )

    try:
        result = await retrying(attempt)
    except RetryError as e:
        logger.warning(
            "probe_exhausted",
            extra={"probe": probe_name, "attempts": attempts},
        )
        raise RetriesExhausted(attempts, probe_name) from e.last_attempt.exception()

    logger.debug("probe_succeeded", extra={"probe": probe_name, "attempt": attempts})
    return result
