"""DruxtMenu — the public entry point for menu retrieval."""

from __future__ import annotations

from typing import Union

from druxt_menu.client.client import DruxtClient
from druxt_menu.config import ModuleOptions, resolve_options
from druxt_menu.errors import ConfigurationError
from druxt_menu.menu.models import MenuResult
from druxt_menu.menu.strategies import (
    DecoupledMenusStrategy,
    JsonApiMenuItemsStrategy,
    MenuLinkContentStrategy,
    get_strategy,
)


class DruxtMenu:
    """Retrieves Drupal menus as normalized entity lists.

    The retrieval strategy is chosen once, from ``options.menu.type``::

        async with DruxtMenu("https://example.com", {"menu": {"type": "jsonapi_menu_items"}}) as menu:
            result = await menu.get("main")

    Parameters
    ----------
    base_url : str
        URL of the Drupal backend. Required.
    options : dict | ModuleOptions | None
        Module options; see :func:`druxt_menu.config.resolve_options`.
    client : DruxtClient | None
        Client to use instead of building one from *base_url* and *options*.
        An injected client is not closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str,
        options: Union[dict, ModuleOptions, None] = None,
        client: DruxtClient | None = None,
    ) -> None:
        if not base_url:
            raise ConfigurationError("The 'base_url' parameter is required.")

        self.options = resolve_options(options)
        self._owns_client = client is None
        self.druxt = client or DruxtClient(
            base_url,
            endpoint=self.options.endpoint,
            headers=self.options.headers,
            timeout=self.options.timeout,
        )
        self.strategy = get_strategy(self.options.menu.type, self.druxt)

    # -- lifecycle -----------------------------------------------------------

    async def aclose(self) -> None:
        if self._owns_client:
            await self.druxt.aclose()

    async def __aenter__(self) -> DruxtMenu:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -- retrieval -----------------------------------------------------------

    async def get(self, menu_name: str) -> MenuResult:
        """Get the menu's items using the configured strategy."""
        return MenuResult(entities=await self.strategy.fetch(menu_name))

    async def get_menu_link_content(self, menu_name: str) -> MenuResult:
        """Get user-created menu links from ``menu_link_content`` resources."""
        return MenuResult(entities=await MenuLinkContentStrategy(self.druxt).fetch(menu_name))

    async def get_jsonapi_menu_items(self, menu_name: str) -> MenuResult:
        """Get all menu links via the JSON:API Menu Items module."""
        return MenuResult(entities=await JsonApiMenuItemsStrategy(self.druxt).fetch(menu_name))

    async def get_decoupled_menu(self, menu_name: str) -> MenuResult:
        """Get menu links via the Decoupled Menus linkset endpoint (experimental)."""
        return MenuResult(entities=await DecoupledMenusStrategy(self.druxt).fetch(menu_name))
