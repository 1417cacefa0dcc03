"""Tests for the DruxtMenu facade."""

import httpx
import pytest

from conftest import BASE_URL, linkset_item, menu_item, menu_link, page
from druxt_menu import ConfigurationError, DruxtMenu, MenuResult
from druxt_menu.menu.strategies import (
    DecoupledMenusStrategy,
    JsonApiMenuItemsStrategy,
    MenuLinkContentStrategy,
)

MLC_PATH = "/jsonapi/menu_link_content/menu_link_content"


def _two_page_backend(backend):
    next_href = f"{BASE_URL}{MLC_PATH}?page%5Boffset%5D=1"
    backend.add(MLC_PATH, page([menu_link("a", "Home", weight=0, parent=None)], next_href))
    backend.add(MLC_PATH, page([menu_link("b", "About", weight=1, parent="a")]), offset="1")


def _menu(backend, options=None) -> DruxtMenu:
    return DruxtMenu(BASE_URL, options, client=backend.client())


# --- Construction ---


@pytest.mark.parametrize("base_url", [None, ""])
def test_missing_base_url_raises_before_network(backend, base_url):
    with pytest.raises(ConfigurationError):
        DruxtMenu(base_url, client=backend.client())
    assert backend.requests == []


def test_default_strategy():
    menu = DruxtMenu(BASE_URL)
    assert isinstance(menu.strategy, MenuLinkContentStrategy)
    assert menu.druxt.endpoint == "/jsonapi"


def test_options_configure_client():
    menu = DruxtMenu(BASE_URL, {"endpoint": "/api", "menu": {"type": "decoupled_menus"}})
    assert menu.druxt.endpoint == "/api"
    assert isinstance(menu.strategy, DecoupledMenusStrategy)


def test_legacy_flag_selects_menu_items_strategy():
    menu = DruxtMenu(BASE_URL, {"menu": {"jsonApiMenuItems": True}})
    assert menu.options.menu.type == "jsonapi_menu_items"
    assert isinstance(menu.strategy, JsonApiMenuItemsStrategy)


def test_unknown_type_falls_back():
    menu = DruxtMenu(BASE_URL, {"menu": {"type": "bogus"}})
    assert isinstance(menu.strategy, MenuLinkContentStrategy)


# --- get() ---


@pytest.mark.asyncio
async def test_get_collects_all_pages_in_order(backend):
    _two_page_backend(backend)
    async with _menu(backend) as menu:
        result = await menu.get("main")

    assert isinstance(result, MenuResult)
    assert [e.id for e in result.entities] == ["a", "b"]
    assert [e.attributes.menu_name for e in result.entities] == ["main", "main"]
    assert result.entities[0].attributes.parent is None
    assert result.entities[1].attributes.parent == "a"
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_get_is_idempotent(backend):
    _two_page_backend(backend)
    async with _menu(backend) as menu:
        first = await menu.get("main")
        second = await menu.get("main")

    assert first.to_dict() == second.to_dict()


@pytest.mark.asyncio
async def test_bogus_type_behaves_like_menu_link_content(backend):
    _two_page_backend(backend)
    async with _menu(backend, {"menu": {"type": "bogus"}}) as menu:
        result = await menu.get("main")
    assert [e.id for e in result.entities] == ["a", "b"]
    assert backend.paths()[0] == MLC_PATH


@pytest.mark.asyncio
async def test_legacy_flag_matches_explicit_type(backend):
    backend.add(
        "/jsonapi/menu_items/main",
        page([menu_item("x", "News", "/news"), menu_item("y", "Sports", "/news/sports", parent="x")]),
    )
    async with _menu(backend, {"menu": {"jsonApiMenuItems": True}}) as legacy:
        legacy_result = await legacy.get("main")
    async with _menu(backend, {"menu": {"type": "jsonapi_menu_items"}}) as typed:
        typed_result = await typed.get("main")

    assert legacy_result.to_dict() == typed_result.to_dict()
    assert [e.attributes.parent for e in typed_result.entities] == [None, "x"]


@pytest.mark.asyncio
async def test_jsonapi_menu_items_leave_index_untouched(backend):
    backend.add("/jsonapi/menu_items/main", page([]))
    async with _menu(backend, {"menu": {"type": "jsonapi_menu_items"}}) as menu:
        await menu.get("main")
        assert menu.druxt.index is None


@pytest.mark.asyncio
async def test_decoupled_menu_via_get(backend):
    backend.add(
        "/system/menu/main/linkset",
        {"linkset": [{"item": [linkset_item("/", "Home", "1"), linkset_item("/a", "A", "1.1")]}]},
    )
    async with _menu(backend, {"menu": {"type": "decoupled_menus"}}) as menu:
        result = await menu.get("main")

    assert result.to_dict()["entities"][1] == {
        "id": "main1.1",
        "attributes": {
            "description": None,
            "link": {"uri": "internal:/a"},
            "menu_name": "main",
            "parent": "main1",
            "title": "A",
            "weight": "1.1",
        },
    }


@pytest.mark.asyncio
async def test_page_failure_aborts_whole_call(backend):
    next_href = f"{BASE_URL}{MLC_PATH}?page%5Boffset%5D=1"
    backend.add(MLC_PATH, page([menu_link("a", "Home")], next_href))
    backend.add(MLC_PATH, {"errors": []}, status_code=503, offset="1")

    async with _menu(backend) as menu:
        with pytest.raises(httpx.HTTPStatusError):
            await menu.get("main")


# --- Direct variant access ---


@pytest.mark.asyncio
async def test_direct_methods_ignore_configured_type(backend):
    _two_page_backend(backend)
    backend.add("/jsonapi/menu_items/main", page([menu_item("x", "News", "/news")]))
    backend.add("/system/menu/main/linkset", {"linkset": [{"item": [linkset_item("/", "Home", "1")]}]})

    async with _menu(backend, {"menu": {"type": "decoupled_menus"}}) as menu:
        mlc = await menu.get_menu_link_content("main")
        items = await menu.get_jsonapi_menu_items("main")
        linkset = await menu.get_decoupled_menu("main")

    assert [e.id for e in mlc.entities] == ["a", "b"]
    assert [e.id for e in items.entities] == ["x"]
    assert [e.id for e in linkset.entities] == ["main1"]


# --- Lifecycle ---


@pytest.mark.asyncio
async def test_injected_client_is_not_closed(backend):
    backend.add("/system/menu/main/linkset", {})
    client = backend.client()
    async with DruxtMenu(BASE_URL, {"menu": {"type": "decoupled_menus"}}, client=client) as menu:
        await menu.get("main")

    # Still usable by its owner.
    assert await client.get("/system/menu/main/linkset") == {}
    await client.aclose()
