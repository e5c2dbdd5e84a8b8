"""Lazy pagination over GitHub list endpoints.

Follows the ``next`` relation of each response's ``link`` header, so callers
never track page numbers themselves. Pages are fetched on demand: page N+1 is
requested only after every record of page N has been handed to the consumer.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from .gate import requires_credential
from .links import parse_link_header
from .transport import json_body, send

logger = logging.getLogger("forkbridge.github.pagination")


class Paginator:
    """Turns a paginated endpoint into a single-pass async iterator.

    Attributes:
        http: httpx client used for every page request
        base_url: API base URL; ``next`` links outside it are not followed, so
            the credential is only ever sent to that host

    Example:
        >>> paginator = Paginator(http, "https://api.github.com")
        >>> repos = paginator.fetch_all("token abc", url, {"page": 1, "per_page": 100})
        >>> async for repo in repos:
        ...     print(repo["full_name"])
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")

    @requires_credential
    def fetch_all(
        self,
        credential: str | None,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict[str, Any]] | None:
        """Return a lazy iterator over every record of a paginated endpoint.

        Nothing is requested until the iterator is consumed. A fresh call is
        needed to iterate again.

        Args:
            credential: Authorization header value, forwarded verbatim
            url: First page URL
            params: Query parameters for the first page only (page, per_page, ...)

        Returns:
            Async iterator of records, or None when no credential is given

        Raises (from the iterator):
            TransportError: When any page request fails
        """
        return self._iterate(credential, url, params)

    async def _iterate(
        self,
        credential: str,
        url: str,
        params: dict[str, Any] | None,
    ) -> AsyncIterator[dict[str, Any]]:
        headers = {"Authorization": credential}
        next_url: str | None = url
        next_params = params
        page = 0

        while next_url:
            page += 1
            response = await send(
                self.http, "GET", next_url, params=next_params, headers=headers
            )
            links = parse_link_header(response.headers.get("link"))
            items = self._page_items(response, next_url)

            logger.debug(
                "page_fetched",
                extra={"page": page, "items": len(items), "has_next": "next" in links},
            )

            for item in items:
                yield item

            # The next link already carries its own page (and per_page) params.
            next_url = links.get("next")
            next_params = None
            if next_url and not next_url.startswith(self.base_url + "/"):
                logger.warning(
                    "next_link_rejected",
                    extra={"url": next_url[:100], "base_url": self.base_url},
                )
                next_url = None

    @staticmethod
    def _page_items(response: httpx.Response, url: str) -> list[dict[str, Any]]:
        """Decode a page body into its ordered records."""
        data = json_body(response)
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            return data["items"]
        logger.warning(
            "page_body_not_a_list",
            extra={"url": url, "body_type": type(data).__name__},
        )
        return []
