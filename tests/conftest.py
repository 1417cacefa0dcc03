"""Shared fixtures: an in-memory Drupal backend served through httpx.MockTransport."""

import httpx
import pytest

from druxt_menu.client.client import DruxtClient

BASE_URL = "https://drupal.test"


class FakeBackend:
    """Serves canned documents keyed by request path and page offset.

    Strings are served as plain text, anything else as JSON.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple, tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, document=None, status_code: int = 200, offset: str | None = None):
        self.routes[(path, offset)] = (status_code, document)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.url.path, request.url.params.get("page[offset]"))
        if key not in self.routes:
            return httpx.Response(404, json={"errors": [{"status": "404"}]})
        status_code, document = self.routes[key]
        if document is None:
            return httpx.Response(status_code)
        if isinstance(document, str):
            return httpx.Response(status_code, text=document)
        return httpx.Response(status_code, json=document)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, **kwargs) -> DruxtClient:
        return DruxtClient(BASE_URL, transport=self.transport, **kwargs)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def menu_link(id: str, title: str, weight=0, parent=None, menu_name: str = "main") -> dict:
    """A menu_link_content--menu_link_content resource."""
    return {
        "type": "menu_link_content--menu_link_content",
        "id": id,
        "attributes": {
            "bundle": "menu_link_content",
            "description": None,
            "link": {"uri": f"internal:/{id}", "title": "", "options": []},
            "menu_name": menu_name,
            "parent": parent,
            "title": title,
            "weight": weight,
        },
    }


def menu_item(id: str, title: str, url: str, parent: str = "", weight: int = 0) -> dict:
    """A resource from the JSON:API Menu Items module."""
    return {
        "type": "menu_link_content--menu_link_content",
        "id": id,
        "attributes": {
            "description": None,
            "enabled": True,
            "menu_name": "main",
            "parent": parent,
            "title": title,
            "url": url,
            "weight": weight,
        },
    }


def linkset_item(href: str, title: str, hierarchy: str) -> dict:
    return {
        "href": href,
        "title": title,
        "drupal-menu": [{"hierarchy": hierarchy, "machine-name": "main"}],
    }


def page(data: list, next_href: str | None = None) -> dict:
    links = {"self": {"href": "self"}}
    if next_href:
        links["next"] = {"href": next_href}
    return {"jsonapi": {"version": "1.0"}, "data": data, "links": links}


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
