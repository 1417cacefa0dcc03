"""Menu retrieval strategies.

Each strategy knows one backend shape for menu data and how to turn it into
:class:`MenuEntity` objects:

- ``menu_link_content``: core menu link content entities. Only sees menu links
  created by users, not links provided by modules.
- ``jsonapi_menu_items``: the JSON:API Menu Items module's ``menu_items``
  resource. Sees every link, but the module must be installed.
- ``decoupled_menus``: the Decoupled Menus linkset endpoint. Experimental.

Raw records are trusted to have the backend's documented shape; nothing here
validates them.
"""

from __future__ import annotations

import logging

from druxt_menu.client.client import DruxtClient
from druxt_menu.client.query import JsonApiParams
from druxt_menu.config import (
    DECOUPLED_MENUS,
    DEFAULT_MENU_TYPE,
    JSONAPI_MENU_ITEMS,
    MENU_LINK_CONTENT,
)
from druxt_menu.menu.hierarchy import parent_hierarchy
from druxt_menu.menu.models import MenuEntity, MenuItemAttributes, MenuLink

logger = logging.getLogger(__name__)

INTERNAL_SCHEME = "internal:"


class MenuStrategy:
    """Interface all menu strategies implement."""

    name = ""
    description = ""

    def __init__(self, client: DruxtClient) -> None:
        self.client = client

    async def fetch(self, menu_name: str) -> list[MenuEntity]:
        """Return the normalized entities of *menu_name*, in backend order."""
        raise NotImplementedError("Menu strategies must implement fetch().")


# ---------------------------------------------------------------------------
# menu_link_content
# ---------------------------------------------------------------------------


def normalize_menu_link_content(resource: dict) -> MenuEntity:
    """Map a ``menu_link_content`` resource; its attributes already match.

    Attribute values are copied unchanged. Keys outside the normalized shape
    (the JSON:API ``type``, ``bundle``, ``link.title``, ``link.options``) are
    not copied; they stay reachable on ``entity.resource``, which is the raw
    record itself.
    """
    attrs = resource.get("attributes") or {}
    return MenuEntity(
        id=resource["id"],
        attributes=MenuItemAttributes(
            title=attrs.get("title"),
            menu_name=attrs.get("menu_name"),
            link=MenuLink(uri=(attrs.get("link") or {}).get("uri")),
            parent=attrs.get("parent"),
            weight=attrs.get("weight"),
            description=attrs.get("description"),
        ),
        resource=resource,
    )


class MenuLinkContentStrategy(MenuStrategy):
    name = MENU_LINK_CONTENT
    description = "User-created links from core menu_link_content entities (default)."

    resource_type = "menu_link_content--menu_link_content"
    fields = ["bundle", "description", "link", "menu_name", "parent", "title", "weight"]

    def build_query(self, menu_name: str) -> JsonApiParams:
        return (
            JsonApiParams()
            .add_filter("enabled", "1")
            .add_filter("menu_name", menu_name)
            .add_fields(self.resource_type, self.fields)
        )

    async def fetch(self, menu_name: str) -> list[MenuEntity]:
        pages = await self.client.get_collection_all(
            self.resource_type, self.build_query(menu_name)
        )
        return [
            normalize_menu_link_content(resource)
            for page in pages
            for resource in page.get("data") or []
        ]


# ---------------------------------------------------------------------------
# jsonapi_menu_items
# ---------------------------------------------------------------------------


def normalize_menu_item(resource: dict, menu_name: str) -> MenuEntity:
    """Map a JSON:API Menu Items resource onto the normalized shape."""
    attrs = resource.get("attributes") or {}
    return MenuEntity(
        id=resource["id"],
        attributes=MenuItemAttributes(
            title=attrs.get("title"),
            menu_name=menu_name,
            link=MenuLink(uri=f"{INTERNAL_SCHEME}{attrs.get('url')}"),
            parent=attrs.get("parent") or None,
            weight=attrs.get("weight"),
            description=attrs.get("description"),
        ),
        resource=resource,
    )


class JsonApiMenuItemsStrategy(MenuStrategy):
    """Menu items from the JSON:API Menu Items module.

    The ``menu_items--<menu>`` resource is not listed in the JSON:API index,
    so its location is passed to the client explicitly on each fetch.
    """

    name = JSONAPI_MENU_ITEMS
    description = "All links, via the JSON:API Menu Items module."

    @staticmethod
    def resource_type(menu_name: str) -> str:
        return f"menu_items--{menu_name}"

    def resource_href(self, menu_name: str) -> str:
        return f"{self.client.endpoint}/menu_items/{menu_name}"

    def build_query(self, menu_name: str) -> JsonApiParams:
        return JsonApiParams().add_filter("enabled", "1").add_filter("menu_name", menu_name)

    async def fetch(self, menu_name: str) -> list[MenuEntity]:
        pages = await self.client.get_collection_all(
            self.resource_type(menu_name),
            self.build_query(menu_name),
            href=self.resource_href(menu_name),
        )
        return [
            normalize_menu_item(resource, menu_name)
            for page in pages
            for resource in page.get("data") or []
        ]


# ---------------------------------------------------------------------------
# decoupled_menus
# ---------------------------------------------------------------------------


def normalize_linkset_item(link: dict, menu_name: str) -> MenuEntity:
    """Map one linkset ``item`` entry onto the normalized shape.

    The entry's hierarchy string becomes both the id suffix and the weight;
    the parent id is derived from the hierarchy.
    """
    hierarchy = link["drupal-menu"][0]["hierarchy"]
    parent = parent_hierarchy(hierarchy)

    return MenuEntity(
        id=f"{menu_name}{hierarchy}",
        attributes=MenuItemAttributes(
            title=link.get("title"),
            menu_name=menu_name,
            # TODO: detect external links once the linkset exposes the link type.
            link=MenuLink(uri=f"{INTERNAL_SCHEME}{link.get('href')}"),
            parent=f"{menu_name}{parent}" if parent else None,
            weight=hierarchy,
            description=None,
        ),
    )


class DecoupledMenusStrategy(MenuStrategy):
    """Menu items from the Decoupled Menus linkset endpoint (experimental)."""

    name = DECOUPLED_MENUS
    description = "Linkset endpoint of the Decoupled Menus module (experimental)."

    @staticmethod
    def linkset_path(menu_name: str) -> str:
        return f"/system/menu/{menu_name}/linkset"

    async def fetch(self, menu_name: str) -> list[MenuEntity]:
        document = await self.client.get(self.linkset_path(menu_name))
        linkset = (document or {}).get("linkset") or []

        return [
            normalize_linkset_item(link, menu_name)
            for links in linkset
            for link in links["item"]
        ]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

STRATEGIES: dict[str, type[MenuStrategy]] = {
    MENU_LINK_CONTENT: MenuLinkContentStrategy,
    JSONAPI_MENU_ITEMS: JsonApiMenuItemsStrategy,
    DECOUPLED_MENUS: DecoupledMenusStrategy,
}


def get_strategy(menu_type: str, client: DruxtClient) -> MenuStrategy:
    """Instantiate the strategy registered for *menu_type*.

    Unknown types fall back to the default strategy.
    """
    strategy_cls = STRATEGIES.get(menu_type)
    if strategy_cls is None:
        logger.warning(
            "Unknown menu type %r, falling back to %r", menu_type, DEFAULT_MENU_TYPE
        )
        strategy_cls = STRATEGIES[DEFAULT_MENU_TYPE]
    logger.debug("Using menu strategy %s", strategy_cls.name)
    return strategy_cls(client)
