"""Async JSON:API resource client for a Drupal backend.

Wraps ``httpx.AsyncClient`` with the handful of JSON:API operations the menu
strategies need: the resource index, single and fully paginated collections,
and raw GETs for endpoints outside JSON:API.

HTTP errors are raised as ``httpx.HTTPStatusError`` and connection problems as
``httpx.TransportError``. A body that is not JSON raises ``ValueError``.
None of these is caught here.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

import httpx

from druxt_menu.client.query import JsonApiParams
from druxt_menu.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/jsonapi"
DEFAULT_TIMEOUT = 10.0
JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

Query = Union[JsonApiParams, dict, None]


def _query_params(query: Query) -> dict:
    if query is None:
        return {}
    if isinstance(query, JsonApiParams):
        return query.get_query_object()
    return dict(query)


def _next_href(document: dict) -> Optional[str]:
    return ((document.get("links") or {}).get("next") or {}).get("href")


class DruxtClient:
    """Client for a Drupal JSON:API backend.

    Parameters
    ----------
    base_url : str
        Backend root URL, e.g. ``https://example.com``.
    endpoint : str
        Path of the JSON:API entry point on the backend.
    headers : dict | None
        Extra headers sent with every request (auth tokens and the like).
    timeout : float
        Request timeout in seconds.
    transport : httpx.AsyncBaseTransport | None
        Custom transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = DEFAULT_ENDPOINT,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ConfigurationError("The 'base_url' parameter is required.")

        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.index: dict[str, dict[str, str]] | None = None

        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": JSONAPI_MEDIA_TYPE, **(headers or {})},
            timeout=timeout,
            transport=transport,
        )

    # -- lifecycle -----------------------------------------------------------

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> DruxtClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -- raw transport -------------------------------------------------------

    async def get(self, path: str, params: dict | None = None) -> Any:
        """GET *path* (relative to the base URL, or absolute) and decode JSON.

        Returns an empty dict when the response has no body.
        """
        logger.debug("GET %s %s", path, params or "")
        response = await self._http.get(path, params=params)
        response.raise_for_status()
        if not response.content:
            return {}
        return response.json()

    # -- resource index ------------------------------------------------------

    async def get_index(self, resource: str | None = None):
        """Load the resource-type → location index.

        The index is fetched from the JSON:API entry point on first use and
        reused afterwards. With *resource*, returns that entry (or ``None``).
        """
        if self.index is None:
            document = await self.get(self.endpoint)
            links = document.get("links") or {}
            self.index = {
                name: {"href": link["href"] if isinstance(link, dict) else link}
                for name, link in links.items()
                if name != "self"
            }
            logger.debug("Loaded JSON:API index with %d resources", len(self.index))

        if resource is None:
            return self.index
        return self.index.get(resource)

    def resource_href(self, resource: str) -> str:
        """Return the known location of *resource*.

        Falls back to Drupal's ``<endpoint>/<entity_type>/<bundle>`` layout
        when the index has not been loaded or lacks the resource.
        """
        entry = (self.index or {}).get(resource)
        if entry:
            return entry["href"]
        return f"{self.endpoint}/{resource.replace('--', '/')}"

    # -- collections ---------------------------------------------------------

    async def get_collection(
        self,
        resource: str,
        query: Query = None,
        href: str | None = None,
    ) -> dict:
        """Fetch the first page of a resource collection.

        *href* overrides the location lookup for this call only.
        """
        location = href or self.resource_href(resource)
        return await self.get(location, params=_query_params(query))

    async def get_collection_all(
        self,
        resource: str,
        query: Query = None,
        href: str | None = None,
    ) -> list[dict]:
        """Fetch every page of a resource collection.

        Follows ``links.next.href`` until a page has no next link and returns
        the page documents in fetch order.
        """
        page = await self.get_collection(resource, query=query, href=href)
        pages = [page]

        next_href = _next_href(page)
        while next_href:
            page = await self.get(next_href)
            pages.append(page)
            next_href = _next_href(page)

        logger.debug("Fetched %d page(s) of %s", len(pages), resource)
        return pages
