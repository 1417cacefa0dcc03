"""druxt-menu CLI — fetch a Drupal menu from the command line."""

import asyncio
import json
import logging

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from druxt_menu import __version__
from druxt_menu.config import (
    MENU_TYPES,
    base_url_from_env,
    load_config,
    menu_type_from_env,
)
from druxt_menu.errors import ConfigurationError
from druxt_menu.menu.hierarchy import weight_key
from druxt_menu.menu.menu import DruxtMenu
from druxt_menu.menu.strategies import STRATEGIES

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and strategy selection")
def main(verbose: bool):
    """druxt-menu — normalized Drupal menus.

    Fetches a menu through core menu link content, the JSON:API Menu Items
    module, or the Decoupled Menus linkset endpoint, and prints the items in
    one uniform shape.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ── Get ──────────────────────────────────────────────────────────────


async def _fetch(base_url: str, options: dict, menu_name: str):
    async with DruxtMenu(base_url, options) as menu:
        return await menu.get(menu_name)


@main.command()
@click.argument("menu_name")
@click.option("--base-url", default=None, help="Drupal backend URL (or DRUXT_BASE_URL)")
@click.option("--type", "menu_type", default=None, help="Menu type (see 'druxt-menu types')")
@click.option("--endpoint", default=None, help="JSON:API endpoint path")
@click.option("--config", "config_path", default=None, type=click.Path(), help="YAML config file")
@click.option("--sort", is_flag=True, help="Sort items by weight")
@click.option("--json", "as_json", is_flag=True, help="Print entities as JSON")
def get(
    menu_name: str,
    base_url: str | None,
    menu_type: str | None,
    endpoint: str | None,
    config_path: str | None,
    sort: bool,
    as_json: bool,
):
    """Fetch MENU_NAME and print its normalized items."""
    try:
        options = load_config(config_path) if config_path else {}
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/] {escape(str(e))}")
        raise SystemExit(1)

    base_url = base_url or options.pop("baseUrl", None) or base_url_from_env()
    menu_type = menu_type or menu_type_from_env()
    if menu_type:
        options["menu"] = {**(options.get("menu") or {}), "type": menu_type}
    if endpoint:
        options["endpoint"] = endpoint

    try:
        result = asyncio.run(_fetch(base_url, options, menu_name))
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/] {escape(str(e))}")
        raise SystemExit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Request failed:[/] {escape(str(e))}")
        raise SystemExit(1)
    except ValueError as e:
        console.print(f"[red]Request failed:[/] response is not valid JSON ({escape(str(e))})")
        raise SystemExit(1)

    entities = result.entities
    if sort:
        entities = sorted(entities, key=lambda e: weight_key(e.attributes.weight))

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entities], indent=2))
        return

    if not entities:
        console.print(f"[yellow]Menu '{menu_name}' has no items.[/]")
        return

    table = Table(title=f"Menu '{menu_name}' ({len(entities)} items)")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Parent", style="dim")
    table.add_column("Weight", justify="right")
    table.add_column("Link", style="green")

    for entity in entities:
        attrs = entity.attributes
        table.add_row(
            entity.id,
            attrs.title or "",
            attrs.parent or "",
            str(attrs.weight),
            attrs.link.uri or "",
        )

    console.print(table)


# ── Types ────────────────────────────────────────────────────────────


@main.command()
def types():
    """List the available menu types."""
    for name in MENU_TYPES:
        console.print(f"[cyan]{name}[/]  {STRATEGIES[name].description}")


if __name__ == "__main__":
    main()
