"""Credential guard for operations that talk to the API on a user's behalf."""

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger("forkbridge.github.gate")

F = TypeVar("F", bound=Callable[..., Any])


def has_credential(credential: str | None) -> bool:
    """True when ``credential`` is a non-empty string."""
    return bool(credential)


def requires_credential(func: F) -> F:
    """Return None instead of calling ``func`` when no credential is supplied.

    The credential is the first argument after ``self`` (positional or the
    ``credential`` keyword). Works for coroutine functions and plain ones; a
    plain function that returns an async iterator is gated before the iterator
    exists, so no request is ever issued.
    """

    def _credential(args: tuple, kwargs: dict) -> str | None:
        if "credential" in kwargs:
            return kwargs["credential"]
        return args[1] if len(args) > 1 else None

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not has_credential(_credential(args, kwargs)):
                logger.debug("credential_missing", extra={"operation": func.__name__})
                return None
            return await func(*args, **kwargs)

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not has_credential(_credential(args, kwargs)):
            logger.debug("credential_missing", extra={"operation": func.__name__})
            return None
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
