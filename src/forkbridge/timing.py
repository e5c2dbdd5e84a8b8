"""Duration logging for awaited client operations."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional


@asynccontextmanager
async def timed_operation(
    operation: str,
    logger: logging.Logger,
    level: int = logging.INFO,
    extra: Optional[dict] = None,
):
    """Log ``<operation>_completed`` or ``<operation>_failed`` with ``duration_ms``.

    Failures are logged at ERROR with the exception type and re-raised.
    """
    start = time.perf_counter()
    context = dict(extra or {})

    def elapsed_ms() -> float:
        return round((time.perf_counter() - start) * 1000, 2)

    try:
        yield
    except Exception as e:
        context.update(
            duration_ms=elapsed_ms(),
            status="failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        logger.error(f"{operation}_failed", extra=context)
        raise

    context.update(duration_ms=elapsed_ms(), status="success")
    logger.log(level, f"{operation}_completed", extra=context)
