"""Single-request HTTP transport for the GitHub client.

Wraps an httpx.AsyncClient call and maps its outcomes onto the package's
error taxonomy. No retries happen here; a failed request surfaces at once.
"""

import logging
from typing import Any

import httpx

from .exceptions import NotFound, TransportError

logger = logging.getLogger("forkbridge.github.transport")


def json_body(response: httpx.Response, default: Any = None) -> Any:
    """Decode the response body as JSON, or return ``default`` if it is not JSON."""
    if not response.content:
        return default
    try:
        return response.json()
    except (ValueError, UnicodeDecodeError):
        return default


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's ``message`` field, falling back to the raw body."""
    error_body = json_body(response, {})
    if not isinstance(error_body, dict):
        error_body = {}
    return error_body.get("message") or response.text


async def send(
    http: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Perform one HTTP request and return the response if it is 2xx.

    Args:
        http: Client used for the request
        method: HTTP method (GET, POST)
        url: Absolute URL; query parameters already embedded are kept
        params: Extra query parameters merged into the URL
        headers: Request headers (credential passed through verbatim)

    Returns:
        The httpx.Response (status 2xx)

    Raises:
        NotFound: On 404
        TransportError: On any other non-2xx status or a network failure
    """
    try:
        response = await http.request(method, url, params=params, headers=headers or {})
    except httpx.HTTPError as e:
        logger.warning(
            "http_request_failed",
            extra={"method": method, "url": url, "error_type": type(e).__name__},
        )
        raise TransportError(f"HTTP error on {method} {url}: {e}") from e

    status = response.status_code
    logger.debug(
        "http_request", extra={"method": method, "url": url, "status_code": status}
    )

    if 200 <= status < 300:
        return response

    message = f"GitHub API error {status} on {method} {url}: {_error_message(response)}"
    if status == 404:
        raise NotFound(message, status_code=status, body=response.text)
    raise TransportError(message, status_code=status, body=response.text)
